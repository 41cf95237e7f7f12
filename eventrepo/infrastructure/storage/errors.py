"""Infrastructure errors raised by storage adapters."""


class StorageError(Exception):
    """Raised when a storage backend rejects or cannot complete a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DocumentConflictError(StorageError):
    """Raised when a document already exists under the requested key."""
