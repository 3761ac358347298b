from .base import IdentityDocument
from .exceptions import (
    ContainerUnavailableError,
    DatabaseError,
    ItemConflictError,
    ItemNotFoundError,
    OperationCancelledError,
    ThrottledError,
)

__all__ = [
    "ContainerUnavailableError",
    "DatabaseError",
    "IdentityDocument",
    "ItemConflictError",
    "ItemNotFoundError",
    "OperationCancelledError",
    "ThrottledError",
]
