import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from identity_store.core.config import settings
from identity_store.core.logging_config import configure_logging
from identity_store.db.session import get_database_manager
from identity_store.stores import UserRolesStore, get_user_roles_store

logger = logging.getLogger(__name__)


async def bootstrap() -> UserRolesStore:
    """Configure logging, make sure the identity container exists and return the store."""
    configure_logging()

    logger.info("Starting %s...", settings.PROJECT_NAME)

    logger.info("Creating identity container '%s' if missing...", settings.IDENTITY_CONTAINER_NAME)
    await get_database_manager().create_container()
    logger.info("Identity container ready.")

    return get_user_roles_store()


async def shutdown():
    logger.info("Disconnecting database pool...")
    await get_database_manager().dispose()
    logger.info("Database pool disconnected.")


@asynccontextmanager
async def lifespan() -> AsyncIterator[UserRolesStore]:
    """
    Handles startup and shutdown of the identity store, ensuring the
    connection pool is cleaned up properly.

    Example:
        async with lifespan() as store:
            await store.add(UserRole(user_id=user.id, role_id=role.id))
    """
    store = await bootstrap()
    try:
        yield store
    finally:
        await shutdown()
