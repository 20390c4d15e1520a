"""
Deletion of servers, channels and messages together with what they own.

Ownership chain::

    Server -> Channel -> Message -> Attachment
    Server -> Emoji, ServerMember, Invite
    Server -> Message (denormalised)

With ``CascadePolicy.CASCADE`` every dependant is removed, children first and
the parent last, so a deletion interrupted halfway can simply be repeated.
With ``CascadePolicy.ORPHAN`` only the parent document is removed and
dependants are left for a separate cleanup job.
"""
import logging
from enum import Enum
from typing import Optional

from bson import ObjectId
from pymongo.database import Database

from stoatdb.config import get_settings
from stoatdb.database.collections import Collections

logger = logging.getLogger(__name__)


class CascadePolicy(str, Enum):
    """What happens to dependants when their parent is deleted."""
    CASCADE = "cascade"
    ORPHAN = "orphan"


def resolve_policy(policy: Optional[CascadePolicy] = None) -> CascadePolicy:
    """Use the given policy, or the configured one."""
    if policy is not None:
        return CascadePolicy(policy)
    return CascadePolicy(get_settings().cascade_policy)


def _message_ids(db: Database, query: dict) -> list[ObjectId]:
    return [doc["_id"] for doc in db[Collections.MESSAGES].find(query, {"_id": 1})]


def _delete_attachments(db: Database, message_ids: list[ObjectId]) -> int:
    if not message_ids:
        return 0
    result = db[Collections.ATTACHMENTS].delete_many({"message_id": {"$in": message_ids}})
    return result.deleted_count


def delete_message(
    db: Database,
    message_id: ObjectId,
    policy: Optional[CascadePolicy] = None,
) -> dict[str, int]:
    """
    Delete a message, and its attachments under the cascade policy.

    Returns:
        Number of deleted documents per collection
    """
    counts = {}
    if resolve_policy(policy) is CascadePolicy.CASCADE:
        counts[Collections.ATTACHMENTS] = _delete_attachments(db, [message_id])
    counts[Collections.MESSAGES] = db[Collections.MESSAGES].delete_one({"_id": message_id}).deleted_count
    return counts


def delete_channel(
    db: Database,
    channel_id: ObjectId,
    policy: Optional[CascadePolicy] = None,
) -> dict[str, int]:
    """
    Delete a channel, and its messages and their attachments under the
    cascade policy.

    Returns:
        Number of deleted documents per collection
    """
    counts = {}
    if resolve_policy(policy) is CascadePolicy.CASCADE:
        message_ids = _message_ids(db, {"channel": channel_id})
        counts[Collections.ATTACHMENTS] = _delete_attachments(db, message_ids)
        counts[Collections.MESSAGES] = (
            db[Collections.MESSAGES].delete_many({"channel": channel_id}).deleted_count
        )
    counts[Collections.CHANNELS] = db[Collections.CHANNELS].delete_one({"_id": channel_id}).deleted_count
    return counts


def delete_server(
    db: Database,
    server_id: ObjectId,
    policy: Optional[CascadePolicy] = None,
) -> dict[str, int]:
    """
    Delete a server, and under the cascade policy everything it owns:
    channels, messages, attachments, emojis, memberships and invites.

    Returns:
        Number of deleted documents per collection
    """
    policy = resolve_policy(policy)
    counts = {}
    if policy is CascadePolicy.CASCADE:
        message_ids = _message_ids(db, {"server": server_id})
        counts[Collections.ATTACHMENTS] = _delete_attachments(db, message_ids)
        for name in (
            Collections.MESSAGES,
            Collections.CHANNELS,
            Collections.EMOJIS,
            Collections.SERVER_MEMBERS,
            Collections.INVITES,
        ):
            counts[name] = db[name].delete_many({"server": server_id}).deleted_count
    counts[Collections.SERVERS] = db[Collections.SERVERS].delete_one({"_id": server_id}).deleted_count

    logger.info("Deleted server %s (%s): %s", server_id, policy.value, counts)
    return counts
