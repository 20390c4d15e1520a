"""
Server (guild) models and the records a server owns: channels, emojis,
memberships and invites.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from bson import ObjectId
from pydantic import Field

from stoatdb.database.collections import Collections
from stoatdb.models.base import StoatRecord, utcnow


class ChannelType(str, Enum):
    """Kinds of server channel."""
    TEXT = "text"
    VOICE = "voice"


class Server(StoatRecord):
    """A server, owned by exactly one user."""
    collection_name = Collections.SERVERS
    references = {"owner": Collections.USERS}

    owner: ObjectId = Field(..., description="User id of the owner")
    name: str = Field(..., min_length=1, max_length=32)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Channel(StoatRecord):
    """A channel inside one server."""
    collection_name = Collections.CHANNELS

    server: ObjectId
    name: str = Field(..., min_length=1, max_length=32)
    type: ChannelType = ChannelType.TEXT
    description: Optional[str] = None


class Emoji(StoatRecord):
    """A custom emoji uploaded to one server."""
    collection_name = Collections.EMOJIS

    server: ObjectId
    name: str = Field(..., min_length=1, max_length=32)


class ServerMember(StoatRecord):
    """Membership of one user in one server; unique per (server, user)."""
    collection_name = Collections.SERVER_MEMBERS

    server: ObjectId
    user: ObjectId
    nickname: Optional[str] = None
    joined_at: datetime = Field(default_factory=utcnow)


class Invite(StoatRecord):
    """An invite code into a server. Removed by the store at expires_at."""
    collection_name = Collections.INVITES

    code: str = Field(..., min_length=1)
    server: ObjectId
    created_by: ObjectId
    channel: Optional[ObjectId] = None
    expires_at: datetime
