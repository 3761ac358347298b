from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar

from identity_store.core.containers.partition import PartitionKey
from identity_store.core.helpers.cancellation import CancellationToken
from identity_store.core.models import IdentityDocument

T = TypeVar("T", bound=IdentityDocument)


class FeedIterator(ABC, Generic[T]):
    """Paginated cursor over the results of a container query."""

    @property
    @abstractmethod
    def has_more_results(self) -> bool:
        ...

    @abstractmethod
    async def read_next(self) -> List[T]:
        """Fetch the next page. Returns an empty list once the feed is exhausted."""


class DocumentContainer(ABC):
    """
    Item-level access to a single container shared by several document types.

    Implementations raise the DatabaseError hierarchy: ItemNotFoundError for
    missing items, ItemConflictError for duplicate ids within a partition.
    Every call accepts the caller's cancellation token; an implementation
    that honors it raises OperationCancelledError once it is cancelled.
    """

    @abstractmethod
    async def create_item(
            self,
            item: T,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> T:
        ...

    @abstractmethod
    async def delete_item(
            self,
            item_type: Type[T],
            item_id: str,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        ...

    @abstractmethod
    async def read_item(
            self,
            item_type: Type[T],
            item_id: str,
            partition_key: PartitionKey,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> T:
        ...

    @abstractmethod
    def query_items(
            self,
            item_type: Type[T],
            filters: dict,
            partition_key: PartitionKey,
            logic_operator: str = "and",
            sort: Optional[List[str]] = None,
            page_size: Optional[int] = None,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> FeedIterator[T]:
        """Build a query over documents of ``item_type`` in one partition; nothing runs until read_next()."""
