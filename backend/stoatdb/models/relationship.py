"""
Relationship model: the state between an ordered pair of users.
"""
from datetime import datetime
from enum import Enum

from bson import ObjectId
from pydantic import Field, model_validator

from stoatdb.database.collections import Collections
from stoatdb.models.base import StoatRecord, utcnow


class RelationshipStatus(str, Enum):
    """A pair of users is in exactly one of these states."""
    PENDING = "pending"
    FRIENDS = "friends"
    BLOCKED = "blocked"


class Relationship(StoatRecord):
    """Relationship from one user to another; unique per (from_user, to_user)."""
    collection_name = Collections.RELATIONSHIPS

    from_user: ObjectId
    to_user: ObjectId
    status: RelationshipStatus
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_distinct_users(self) -> "Relationship":
        if self.from_user == self.to_user:
            raise ValueError("A user cannot have a relationship with themselves")
        return self
