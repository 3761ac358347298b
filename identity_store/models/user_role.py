from typing import Literal

from identity_store.core.models import IdentityDocument


class UserRole(IdentityDocument):
    """
    Association document linking a User to a Role.

    A (user_id, role_id) pair is expected to appear once; nothing in the
    container enforces it.
    """
    type: Literal["IdentityUserRole"] = "IdentityUserRole"
    partition_key: str = "IdentityUserRole"

    user_id: str
    role_id: str

    def __repr__(self):
        return f"<UserRole(User ID='{self.user_id}', Role ID='{self.role_id}')>"
