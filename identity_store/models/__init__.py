from .roles import Role
from .users import User
from .user_role import UserRole


__all__ = [
    "Role",
    "User",
    "UserRole",
]
