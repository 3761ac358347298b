from .base import DocumentContainer, FeedIterator
from .partition import PartitionKey, partition_key_for
from .sql_container import SqlDocumentContainer, SqlFeedIterator, get_identity_container

__all__ = [
    "DocumentContainer",
    "FeedIterator",
    "PartitionKey",
    "SqlDocumentContainer",
    "SqlFeedIterator",
    "get_identity_container",
    "partition_key_for",
]
