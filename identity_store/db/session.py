from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from identity_store.core.config import settings


# ----------------------------------------------------------------------
# 1. Base Declaration
# ----------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


class IdentityItem(Base):
    """
    One row per document of the identity container.

    Users, roles and user roles share this table; ``type`` tells them apart
    and ``body`` holds the serialized document. Unpartitioned documents are
    stored with an empty partition key.
    """
    __tablename__ = settings.IDENTITY_CONTAINER_NAME

    partition_key: Mapped[str] = mapped_column(String(255), primary_key=True, default="")
    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    type: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    body: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self):
        return f"<IdentityItem(type='{self.type}', id='{self.id}', partition_key='{self.partition_key}')>"


# ----------------------------------------------------------------------
# 2. Database Manager Class
# ----------------------------------------------------------------------

class DatabaseManager:
    """
    Manages the SQLAlchemy AsyncEngine and the AsyncSession factory backing
    the identity container.
    """

    def __init__(self, db_url: str, echo: Optional[bool] = None):
        """
        Initializes the DatabaseManager with the database connection URL.

        Args:
            db_url (str): The connection string for the asynchronous database driver.
            echo (bool): Log generated SQL. Defaults to settings.DEBUG.
        """
        self._engine: AsyncEngine = create_async_engine(
            db_url,
            # Checks connection validity on pool checkout.
            pool_pre_ping=True,
            echo=settings.DEBUG if echo is None else echo,
        )

        self._async_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            bind=self._engine,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._async_session_factory

    async def create_container(self):
        """Create the identity container table if it does not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        """Close every pooled connection."""
        await self._engine.dispose()


@lru_cache()
def get_database_manager() -> DatabaseManager:
    return DatabaseManager(settings.ASYNC_DATABASE_URL)
