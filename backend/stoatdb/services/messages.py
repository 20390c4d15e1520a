"""
Read paths that depend on the declared indexes.
"""
from typing import Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from stoatdb.database.collections import Collections
from stoatdb.database.documents import from_document
from stoatdb.models.base import utcnow
from stoatdb.models.message import Message
from stoatdb.models.session import Session


def search_messages(
    db: Database,
    text: str,
    channel: Optional[ObjectId] = None,
    limit: int = 50,
) -> list[Message]:
    """Full-text search over message content, newest first."""
    query: dict = {"$text": {"$search": text}}
    if channel is not None:
        query["channel"] = channel

    cursor = db[Collections.MESSAGES].find(query).sort("created_at", DESCENDING).limit(limit)
    return [from_document(Message, doc) for doc in cursor]


def list_channel_messages(
    db: Database,
    channel: ObjectId,
    limit: int = 50,
) -> list[Message]:
    """Most recent messages of a channel, newest first."""
    cursor = (
        db[Collections.MESSAGES]
        .find({"channel": channel})
        .sort("created_at", DESCENDING)
        .limit(limit)
    )
    return [from_document(Message, doc) for doc in cursor]


def find_session(db: Database, token: str) -> Optional[Session]:
    """
    Look up a live session by token.

    The TTL monitor removes expired sessions on its own schedule (about once
    a minute), so sessions past ``expires_at`` are filtered out here too.
    """
    doc = db[Collections.SESSIONS].find_one({"token": token, "expires_at": {"$gt": utcnow()}})
    if doc is None:
        return None
    return from_document(Session, doc)
