class DocumentsError(Exception):
    """Base exception for all document upload/retrieval errors."""


class StorageDisabledError(DocumentsError):
    """Raised when object storage is not enabled or not configured."""


class MissingInputError(DocumentsError):
    """Raised when a required request input is absent or invalid."""


class PayloadTooLargeError(DocumentsError):
    """Raised when an uploaded file exceeds the configured maximum size."""


class DocumentNotFoundError(DocumentsError):
    """Raised when a document cannot be found in the database."""


class UploadFailedError(DocumentsError):
    """Raised when storing an upload fails for an unexpected reason."""


class ObjectFetchError(DocumentsError):
    """Raised when a stored object cannot be read back."""
