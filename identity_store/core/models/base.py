import uuid

from pydantic import BaseModel, ConfigDict, Field


class IdentityDocument(BaseModel):
    """Base class for every item stored in the identity container.

    Subclasses pin ``type`` to a literal discriminator and give ``partition_key``
    a default, so several kinds of documents can share one container.
    """
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    # An empty string means the document is not partitioned.
    partition_key: str = ""
    type: str = "IdentityDocument"

    @classmethod
    def document_type(cls) -> str:
        return cls.model_fields["type"].default

    @classmethod
    def default_partition_key(cls) -> str:
        return cls.model_fields["partition_key"].default

    def to_document(self) -> dict:
        return self.model_dump(mode="json")
