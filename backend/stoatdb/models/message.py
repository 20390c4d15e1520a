"""
Message and attachment models.
"""
from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import Field

from stoatdb.database.collections import Collections
from stoatdb.models.base import StoatRecord, utcnow


class Message(StoatRecord):
    """
    A message in a channel.

    ``server`` is denormalised from the channel so a whole server's messages
    can be found without going through its channels.
    """
    collection_name = Collections.MESSAGES

    channel: ObjectId
    server: ObjectId
    author: ObjectId
    content: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    edited_at: Optional[datetime] = None


class Attachment(StoatRecord):
    """A file uploaded with a message."""
    collection_name = Collections.ATTACHMENTS

    message_id: ObjectId
    filename: str = Field(..., min_length=1)
    content_type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    uploaded_at: datetime = Field(default_factory=utcnow)
