class ExtractionError(Exception):
    """Raised when receipt extraction fails."""


class ExtractionDisabledError(ExtractionError):
    """Raised when receipt extraction is turned off for the deployment."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class DocumentUrlUnavailableError(ExtractionError):
    """Raised when no readable URL can be produced for a document."""
