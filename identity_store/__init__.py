from identity_store.core.helpers.cancellation import CancellationToken
from identity_store.core.models.exceptions import (
    ContainerUnavailableError,
    DatabaseError,
    ItemConflictError,
    ItemNotFoundError,
    OperationCancelledError,
    ThrottledError,
)
from identity_store.models import Role, User, UserRole
from identity_store.stores import UserRolesStore, get_user_roles_store

__all__ = [
    "CancellationToken",
    "ContainerUnavailableError",
    "DatabaseError",
    "ItemConflictError",
    "ItemNotFoundError",
    "OperationCancelledError",
    "Role",
    "ThrottledError",
    "User",
    "UserRole",
    "UserRolesStore",
    "get_user_roles_store",
]
