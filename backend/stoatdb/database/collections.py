"""
Schema registry for the stoatchat database.

The collection names below are part of the on-disk contract: every service
reading the store depends on them staying stable.
"""
import logging

from pymongo.database import Database
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from stoatdb.core.exceptions import StructuralError

logger = logging.getLogger(__name__)

DB_NAME = "stoatchat"

# Server error code for a collection that already exists
NAMESPACE_EXISTS = 48


class Collections:
    """Collection names in the stoatchat database."""
    USERS = "users"
    SERVERS = "servers"
    CHANNELS = "channels"
    MESSAGES = "messages"
    SESSIONS = "sessions"
    ATTACHMENTS = "attachments"
    EMOJIS = "emojis"
    SERVER_MEMBERS = "server_members"
    RELATIONSHIPS = "relationships"
    INVITES = "invites"

    ALL = (
        USERS,
        SERVERS,
        CHANNELS,
        MESSAGES,
        SESSIONS,
        ATTACHMENTS,
        EMOJIS,
        SERVER_MEMBERS,
        RELATIONSHIPS,
        INVITES,
    )


# Manifest for the database, one line of purpose per collection
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Chat platform users, servers, channels and messages",
    "collections": {
        Collections.USERS: "Accounts, including the admin and System seed users",
        Collections.SERVERS: "Servers (guilds), each owned by one user",
        Collections.CHANNELS: "Channels belonging to a server",
        Collections.MESSAGES: "Messages posted in a channel, full-text searchable",
        Collections.SESSIONS: "Login sessions, removed by the store at expires_at",
        Collections.ATTACHMENTS: "Files uploaded with a message",
        Collections.EMOJIS: "Custom emojis of a server",
        Collections.SERVER_MEMBERS: "One row per (server, user) membership",
        Collections.RELATIONSHIPS: "Friend / pending / blocked state per user pair",
        Collections.INVITES: "Server invite codes, removed by the store at expires_at",
    },
}


def ensure_collections(db: Database) -> dict[str, bool]:
    """
    Create every registered collection that does not exist yet.

    Existing collections are left alone. Another process creating the same
    collection concurrently counts as "already exists".

    Returns:
        Mapping of collection name to True if it was created by this call

    Raises:
        StructuralError: If the store refuses to list or create collections
    """
    try:
        existing = set(db.list_collection_names())
    except PyMongoError as e:
        raise StructuralError(f"Cannot list collections in {db.name}: {e}") from e

    created: dict[str, bool] = {}
    for name in Collections.ALL:
        if name in existing:
            created[name] = False
            continue
        try:
            db.create_collection(name)
            created[name] = True
            logger.info("Created collection %s", name)
        except CollectionInvalid:
            # Created by someone else between the listing and now
            created[name] = False
        except OperationFailure as e:
            if e.code != NAMESPACE_EXISTS:
                raise StructuralError(
                    f"Cannot create collection {name}: {e}", collection=name
                ) from e
            created[name] = False
        except PyMongoError as e:
            raise StructuralError(
                f"Cannot create collection {name}: {e}", collection=name
            ) from e

    return created
