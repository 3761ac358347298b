class DatabaseError(Exception):
    """Base exception for failures reported by a document container."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ItemNotFoundError(DatabaseError):
    """Exception raised when an item does not exist in the given partition."""

    def __init__(self, message: str, status_code: int = 404):
        super().__init__(message, status_code)


class ItemConflictError(DatabaseError):
    """Exception raised when an item with the same id already exists in the partition."""

    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message, status_code)


class ThrottledError(DatabaseError):
    """Exception raised when the database rejects a request due to rate limiting."""

    def __init__(self, message: str, status_code: int = 429):
        super().__init__(message, status_code)


class ContainerUnavailableError(DatabaseError):
    """Exception raised when the container cannot be reached or the request timed out."""

    def __init__(self, message: str, status_code: int = 503):
        super().__init__(message, status_code)


class OperationCancelledError(Exception):
    """Exception raised when an operation is requested with an already cancelled token."""
    pass
