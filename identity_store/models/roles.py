from typing import Literal, Optional

from pydantic import field_validator

from identity_store.core.helpers.flatten import ROLE_DELIMITER
from identity_store.core.models import IdentityDocument


class Role(IdentityDocument):
    """A named role users can be members of."""
    type: Literal["IdentityRole"] = "IdentityRole"
    partition_key: str = "IdentityRole"

    name: str
    normalized_name: Optional[str] = None

    @field_validator("id", "name")
    @classmethod
    def no_delimiter(cls, value: str) -> str:
        # Role ids and names are flattened onto user documents.
        if ROLE_DELIMITER in value:
            raise ValueError(f"must not contain {ROLE_DELIMITER!r}")
        return value

    def __repr__(self):
        return f"<Role(id='{self.id}', name='{self.name}')>"
