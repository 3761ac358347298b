from typing import List, Literal, Optional

from identity_store.core.helpers.flatten import flatten_values, split_flattened
from identity_store.core.models import IdentityDocument
from identity_store.models.roles import Role


class User(IdentityDocument):
    """
    Identity user document.

    Role membership is denormalized onto the user as two comma-joined fields
    so that membership queries can run against the user documents alone.
    Use ``role_names``/``role_ids`` to work with them as lists.
    """
    type: Literal["IdentityUser"] = "IdentityUser"
    partition_key: str = "IdentityUser"

    user_name: Optional[str] = None
    normalized_user_name: Optional[str] = None
    email: Optional[str] = None

    flatten_role_names: str = ""
    flatten_role_ids: str = ""

    @property
    def role_names(self) -> List[str]:
        return split_flattened(self.flatten_role_names)

    @property
    def role_ids(self) -> List[str]:
        return split_flattened(self.flatten_role_ids)

    def assign_role(self, role: Role):
        """Record membership in ``role``; assigning the same role twice is a no-op."""
        role_ids = self.role_ids
        if role.id in role_ids:
            return

        self.flatten_role_ids = flatten_values(role_ids + [role.id])
        self.flatten_role_names = flatten_values(self.role_names + [role.name])

    def revoke_role(self, role: Role):
        """Drop membership in ``role``; names are removed by position, not by value."""
        memberships = list(zip(self.role_ids, self.role_names))
        if all(rid != role.id for rid, _ in memberships):
            return

        kept = [(rid, name) for rid, name in memberships if rid != role.id]
        self.flatten_role_ids = flatten_values(rid for rid, _ in kept)
        self.flatten_role_names = flatten_values(name for _, name in kept)

    def __repr__(self):
        return f"<User(id='{self.id}', user_name='{self.user_name}')>"
