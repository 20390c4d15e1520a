"""
Session model for the sessions collection.
"""
from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import Field

from stoatdb.database.collections import Collections
from stoatdb.models.base import StoatRecord


class Session(StoatRecord):
    """A login session. The store deletes it once expires_at has passed."""
    collection_name = Collections.SESSIONS

    user_id: ObjectId
    token: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, description="Device or client name")
    expires_at: datetime
