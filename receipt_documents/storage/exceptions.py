class ObjectStoreError(Exception):
    """Raised when the object store rejects or fails a request."""
