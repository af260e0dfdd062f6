class DocumentsClientError(Exception):
    """Base exception for documents API client errors."""


class DocumentUploadError(DocumentsClientError):
    """Raised when the documents API rejects an upload."""


class DocumentFetchError(DocumentsClientError):
    """Raised when a document cannot be downloaded."""
