"""Tests for settings loading and the store bootstrap."""

import pytest

from identity_store.core import bootstrap as bootstrap_module
from identity_store.core.config import Settings, settings
from identity_store.core.containers import SqlDocumentContainer, get_identity_container
from identity_store.db.session import get_database_manager
from identity_store.models import UserRole
from identity_store.stores import UserRolesStore, get_user_roles_store


def _clear_caches():
    get_user_roles_store.cache_clear()
    get_identity_container.cache_clear()
    get_database_manager.cache_clear()


@pytest.fixture
def configured(tmp_path, monkeypatch):
    """Point the cached factories at a temporary SQLite database."""
    monkeypatch.setattr(settings, "ASYNC_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}")
    monkeypatch.setattr(settings, "QUERY_PAGE_SIZE", 7)
    monkeypatch.setattr(settings, "ROLE_STORE_SUPPRESS_ERRORS", False)
    monkeypatch.setattr(bootstrap_module, "configure_logging", lambda: None)
    _clear_caches()
    yield
    _clear_caches()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("QUERY_PAGE_SIZE", raising=False)

        assert Settings(_env_file=None).QUERY_PAGE_SIZE == 100
        assert Settings(_env_file=None).ROLE_STORE_SUPPRESS_ERRORS is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("QUERY_PAGE_SIZE", "5")
        monkeypatch.setenv("ROLE_STORE_SUPPRESS_ERRORS", "false")

        loaded = Settings(_env_file=None)

        assert loaded.QUERY_PAGE_SIZE == 5
        assert loaded.ROLE_STORE_SUPPRESS_ERRORS is False


class TestFactories:
    def test_store_is_built_from_settings(self, configured):
        store = get_user_roles_store()

        assert isinstance(store, UserRolesStore)
        assert isinstance(store.container, SqlDocumentContainer)
        assert store.container.page_size == 7
        assert store.error_policy.suppress_errors is False
        assert get_user_roles_store() is store


class TestLifespan:
    @pytest.mark.asyncio
    async def test_lifespan_creates_container(self, configured):
        user_role = UserRole(user_id="u1", role_id="r1")

        async with bootstrap_module.lifespan() as store:
            await store.add(user_role)
            assert await store.find("u1", "r1") == user_role
