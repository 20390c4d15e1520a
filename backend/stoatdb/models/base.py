"""
Base model shared by every stored record.
"""
from datetime import datetime, timezone
from typing import ClassVar

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class StoatRecord(BaseModel):
    """
    A document in one of the stoatchat collections.

    Subclasses set ``collection_name`` to tag which collection they live in.
    Unknown fields are rejected when a record is built; documents read back
    from the store drop them instead (see ``from_document``).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        extra="forbid",
        validate_default=True,
    )

    collection_name: ClassVar[str]

    # Fields that must point at an existing document: field -> target collection
    references: ClassVar[dict[str, str]] = {}

    id: ObjectId = Field(default_factory=ObjectId, alias="_id", description="MongoDB ObjectId")
