from .user_roles_store import UserRolesStore, get_user_roles_store

__all__ = [
    "UserRolesStore",
    "get_user_roles_store",
]
