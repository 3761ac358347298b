from typing import Optional


class PartitionKey:
    """Partition key value passed to a document container.

    ``PartitionKey.NONE`` addresses documents stored without a partition.
    """

    __slots__ = ("value",)

    NONE: "PartitionKey"

    def __init__(self, value: Optional[str]):
        self.value = value

    @property
    def is_none(self) -> bool:
        return self.value is None

    def __eq__(self, other):
        if not isinstance(other, PartitionKey):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return "PartitionKey.NONE" if self.is_none else f"PartitionKey({self.value!r})"


PartitionKey.NONE = PartitionKey(None)


def partition_key_for(value: Optional[str]) -> PartitionKey:
    return PartitionKey.NONE if not value else PartitionKey(value)
