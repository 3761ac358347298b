import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import List, Optional, Type

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_store.core.config import settings
from identity_store.core.containers.base import DocumentContainer, FeedIterator, T
from identity_store.core.containers.partition import PartitionKey
from identity_store.core.helpers.cancellation import CancellationToken, throw_if_cancelled
from identity_store.core.helpers.filter_helper import apply_filters_and_sorting
from identity_store.core.models.exceptions import (
    ContainerUnavailableError,
    DatabaseError,
    ItemConflictError,
    ItemNotFoundError,
)
from identity_store.db.session import IdentityItem, get_database_manager

logger = logging.getLogger(__name__)


def _stored_partition_key(partition_key: PartitionKey) -> str:
    return "" if partition_key.is_none else partition_key.value


@contextmanager
def translate_errors(action: str):
    """Re-raise SQLAlchemy failures as DatabaseErrors."""
    try:
        yield
    except IntegrityError as e:
        raise ItemConflictError(f"{action}: conflicting item. {e.orig}") from e
    except (OperationalError, PoolTimeoutError) as e:
        raise ContainerUnavailableError(f"{action}: container unavailable. {e}") from e
    except SQLAlchemyError as e:
        raise DatabaseError(f"{action}: an error occurred. {e}") from e


class SqlFeedIterator(FeedIterator[T]):
    """Offset-paginated cursor over a select of IdentityItem rows."""

    def __init__(
            self,
            session_factory: async_sessionmaker[AsyncSession],
            query,
            item_type: Type[T],
            page_size: int,
            cancellation_token: Optional[CancellationToken] = None,
    ):
        self._session_factory = session_factory
        self._query = query.order_by(IdentityItem.created_at, IdentityItem.id)
        self._item_type = item_type
        self._page_size = page_size
        self._offset = 0
        self._has_more = True
        self._cancellation_token = cancellation_token

    @property
    def has_more_results(self) -> bool:
        return self._has_more

    async def read_next(self) -> List[T]:
        throw_if_cancelled(self._cancellation_token)

        if not self._has_more:
            return []

        with translate_errors(f"Querying {self._item_type.document_type()}"):
            async with self._session_factory() as session:
                # One extra row tells whether another page exists.
                result = await session.execute(self._query.offset(self._offset).limit(self._page_size + 1))
                records = result.scalars().all()

        self._has_more = len(records) > self._page_size
        records = records[:self._page_size]
        self._offset += len(records)

        return [self._item_type.model_validate(record.body) for record in records]


class SqlDocumentContainer(DocumentContainer):
    """Document container stored in a single SQL table through SQLAlchemy asyncio."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], page_size: int = 100):
        if session_factory is None:
            raise ValueError("session_factory must not be None")
        self._session_factory = session_factory
        self.page_size = page_size

    async def create_item(
            self,
            item: T,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> T:
        throw_if_cancelled(cancellation_token)

        record = IdentityItem(
            id=item.id,
            partition_key=_stored_partition_key(partition_key),
            type=item.document_type(),
            body=item.to_document(),
        )

        with translate_errors(f"Creating {item.document_type()} {item.id}"):
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()

        logger.debug("Created %s %s in partition %r", record.type, record.id, record.partition_key)
        return item

    async def delete_item(
            self,
            item_type: Type[T],
            item_id: str,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        throw_if_cancelled(cancellation_token)

        action = f"Deleting {item_type.document_type()} {item_id}"
        query = delete(IdentityItem).where(
            IdentityItem.id == item_id,
            IdentityItem.partition_key == _stored_partition_key(partition_key),
            IdentityItem.type == item_type.document_type(),
        )

        with translate_errors(action):
            async with self._session_factory() as session:
                result = await session.execute(query, execution_options={"synchronize_session": False})
                await session.commit()

        if result.rowcount == 0:
            raise ItemNotFoundError(f"{action}: item not found.")

        logger.debug("Deleted %s %s", item_type.document_type(), item_id)

    async def read_item(
            self,
            item_type: Type[T],
            item_id: str,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> T:
        throw_if_cancelled(cancellation_token)

        action = f"Reading {item_type.document_type()} {item_id}"
        query = select(IdentityItem).where(
            IdentityItem.id == item_id,
            IdentityItem.partition_key == _stored_partition_key(partition_key),
            IdentityItem.type == item_type.document_type(),
        )

        with translate_errors(action):
            async with self._session_factory() as session:
                result = await session.execute(query)
                record = result.scalars().first()

        if record is None:
            raise ItemNotFoundError(f"{action}: item not found.")

        return item_type.model_validate(record.body)

    def query_items(
            self,
            item_type: Type[T],
            filters: dict,
            partition_key: PartitionKey,
            logic_operator: str = "and",
            sort: Optional[List[str]] = None,
            page_size: Optional[int] = None,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> SqlFeedIterator[T]:
        base_query = select(IdentityItem).where(
            IdentityItem.partition_key == _stored_partition_key(partition_key),
            IdentityItem.type == item_type.document_type(),
        )

        query = apply_filters_and_sorting(
            base_query,
            IdentityItem.body,
            filters=filters,
            sort=sort,
            logic_operator=logic_operator,
        )

        return SqlFeedIterator(
            self._session_factory, query, item_type, page_size or self.page_size, cancellation_token
        )


@lru_cache()
def get_identity_container() -> SqlDocumentContainer:
    return SqlDocumentContainer(
        get_database_manager().async_session_factory,
        page_size=settings.QUERY_PAGE_SIZE
    )
