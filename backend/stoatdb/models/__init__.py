"""
Pydantic models for the documents stored in each collection.
"""
from stoatdb.models.base import StoatRecord, utcnow
from stoatdb.models.user import User, UserProfile
from stoatdb.models.server import (
    Server,
    Channel,
    ChannelType,
    Emoji,
    ServerMember,
    Invite,
)
from stoatdb.models.message import Message, Attachment
from stoatdb.models.session import Session
from stoatdb.models.relationship import Relationship, RelationshipStatus

__all__ = [
    "StoatRecord",
    "utcnow",
    "User",
    "UserProfile",
    "Server",
    "Channel",
    "ChannelType",
    "Emoji",
    "ServerMember",
    "Invite",
    "Message",
    "Attachment",
    "Session",
    "Relationship",
    "RelationshipStatus",
]
