"""Tests for the identity documents and the flattened role fields."""

import pytest
from pydantic import ValidationError

from identity_store.core.helpers import flatten_values, split_flattened
from identity_store.models import Role, User, UserRole


class TestFlattening:
    def test_split_discards_empty_segments(self):
        assert split_flattened("admin,,editor,") == ["admin", "editor"]

    @pytest.mark.parametrize("value", ["", None, ",,"])
    def test_split_empty(self, value):
        assert split_flattened(value) == []

    def test_flatten_keeps_order(self):
        assert flatten_values(["editor", "admin"]) == "editor,admin"

    def test_flatten_rejects_delimiter(self):
        with pytest.raises(ValueError):
            flatten_values(["admin,editor"])


class TestDocuments:
    def test_discriminators_and_default_partitions(self):
        assert User.document_type() == "IdentityUser"
        assert Role.document_type() == "IdentityRole"
        assert UserRole.document_type() == "IdentityUserRole"
        assert UserRole.default_partition_key() == "IdentityUserRole"

    def test_generated_ids_are_unique(self):
        assert UserRole(user_id="u1", role_id="r1").id != UserRole(user_id="u1", role_id="r1").id

    def test_to_document(self):
        user_role = UserRole(id="ur1", user_id="u1", role_id="r1")

        assert user_role.to_document() == {
            "id": "ur1",
            "partition_key": "IdentityUserRole",
            "type": "IdentityUserRole",
            "user_id": "u1",
            "role_id": "r1",
        }

    def test_type_mismatch_is_rejected(self):
        with pytest.raises(ValidationError):
            UserRole.model_validate({"id": "x", "type": "IdentityUser", "user_id": "u1", "role_id": "r1"})

    @pytest.mark.parametrize("field", ["id", "name"])
    def test_role_rejects_delimiter(self, field):
        values = {"id": "r1", "name": "admin"}
        values[field] = "a,b"

        with pytest.raises(ValidationError):
            Role(**values)


class TestUserRoles:
    def test_assign_role(self):
        user = User(id="u1")

        user.assign_role(Role(id="r1", name="admin"))
        user.assign_role(Role(id="r2", name="editor"))

        assert user.flatten_role_ids == "r1,r2"
        assert user.flatten_role_names == "admin,editor"
        assert user.role_ids == ["r1", "r2"]
        assert user.role_names == ["admin", "editor"]

    def test_assign_role_twice(self):
        user = User(id="u1")
        role = Role(id="r1", name="admin")

        user.assign_role(role)
        user.assign_role(role)

        assert user.role_ids == ["r1"]

    def test_revoke_role(self):
        admin = Role(id="r1", name="admin")
        editor = Role(id="r2", name="editor")
        user = User(id="u1")
        user.assign_role(admin)
        user.assign_role(editor)

        user.revoke_role(admin)

        assert user.role_ids == ["r2"]
        assert user.role_names == ["editor"]

    def test_revoke_unassigned_role(self):
        user = User(id="u1")

        user.revoke_role(Role(id="r1", name="admin"))

        assert user.flatten_role_ids == ""

    def test_revoke_role_sharing_a_name(self):
        user = User(id="u1")
        user.assign_role(Role(id="r1", name="admin"))
        user.assign_role(Role(id="r2", name="admin"))

        user.revoke_role(Role(id="r1", name="admin"))

        assert user.role_ids == ["r2"]
        assert user.role_names == ["admin"]

    def test_revoke_keeps_positions_aligned(self):
        user = User(id="u1")
        for role_id, name in [("r1", "admin"), ("r2", "editor"), ("r3", "admin")]:
            user.assign_role(Role(id=role_id, name=name))

        user.revoke_role(Role(id="r3", name="admin"))

        assert user.role_ids == ["r1", "r2"]
        assert user.role_names == ["admin", "editor"]
