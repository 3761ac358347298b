"""Shared test fixtures."""

import pytest
import pytest_asyncio

from identity_store.core.containers import SqlDocumentContainer
from identity_store.db.session import DatabaseManager
from identity_store.models import Role, UserRole
from identity_store.stores import UserRolesStore


@pytest_asyncio.fixture
async def database_manager(tmp_path):
    """Temporary SQLite identity container, dropped with the test's tmp_path."""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}", echo=False)
    await manager.create_container()
    yield manager
    await manager.dispose()


@pytest.fixture
def container(database_manager):
    # A small page size makes every multi-item query paginate.
    return SqlDocumentContainer(database_manager.async_session_factory, page_size=2)


@pytest.fixture
def store(container):
    return UserRolesStore(container)


@pytest.fixture
def admin_role():
    return Role(id="r1", name="admin")


@pytest.fixture
def editor_role():
    return Role(id="r2", name="editor")


@pytest.fixture
def user_role():
    return UserRole(user_id="u1", role_id="r1")
