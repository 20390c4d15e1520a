"""
Index declarations for the stoatchat collections.

Each collection gets an ordered list of index definitions in the same shape
``create_index`` takes: ``keys`` plus optional ``unique`` or
``expireAfterSeconds``. A ``"text"`` direction makes a full-text index.

Unique indexes are the data-model invariants (one user per username and per
email, one membership per (server, user), one relationship per ordered user
pair, one invite per code). TTL indexes make the store itself delete
sessions and invites once ``expires_at`` has passed.
"""
import logging
from enum import Enum
from typing import Any

from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from stoatdb.core.exceptions import ConstraintConflictError, StructuralError
from stoatdb.database.collections import Collections

logger = logging.getLogger(__name__)

# Documents become eligible for removal the moment expires_at is reached
TTL_GRACE_SECONDS = 0

# Server error codes for an index name clash with different keys/options
INDEX_OPTIONS_CONFLICT = 85
INDEX_KEY_SPECS_CONFLICT = 86

# How many conflicting values to report when a unique index can't be built
MAX_REPORTED_CONFLICTS = 5


class IndexKind(str, Enum):
    """What an index definition guarantees."""
    LOOKUP = "lookup"
    UNIQUE = "unique"
    TEXT = "text"
    TTL = "ttl"


INDEXES: dict[str, list[dict[str, Any]]] = {
    Collections.USERS: [
        {"keys": [("username", ASCENDING)], "unique": True},
        {"keys": [("email", ASCENDING)], "unique": True},
        {"keys": [("created_at", DESCENDING)]},
        {"keys": [("last_seen", DESCENDING)]},
    ],
    Collections.SERVERS: [
        {"keys": [("owner", ASCENDING)]},
        {"keys": [("name", ASCENDING)]},
        {"keys": [("created_at", DESCENDING)]},
    ],
    Collections.CHANNELS: [
        {"keys": [("server", ASCENDING)]},
        {"keys": [("name", ASCENDING)]},
        {"keys": [("type", ASCENDING)]},
    ],
    Collections.MESSAGES: [
        {"keys": [("channel", ASCENDING), ("created_at", DESCENDING)]},
        {"keys": [("author", ASCENDING)]},
        {"keys": [("server", ASCENDING)]},
        {"keys": [("content", TEXT)]},  # Text index for search
    ],
    Collections.SESSIONS: [
        {"keys": [("user_id", ASCENDING)]},
        {"keys": [("token", ASCENDING)]},
        {"keys": [("expires_at", ASCENDING)], "expireAfterSeconds": TTL_GRACE_SECONDS},
    ],
    Collections.ATTACHMENTS: [
        {"keys": [("message_id", ASCENDING)]},
        {"keys": [("filename", ASCENDING)]},
        {"keys": [("uploaded_at", DESCENDING)]},
    ],
    Collections.EMOJIS: [
        {"keys": [("name", ASCENDING)]},
        {"keys": [("server", ASCENDING)]},
    ],
    Collections.SERVER_MEMBERS: [
        {"keys": [("server", ASCENDING), ("user", ASCENDING)], "unique": True},
        {"keys": [("user", ASCENDING)]},
    ],
    Collections.RELATIONSHIPS: [
        {"keys": [("from_user", ASCENDING), ("to_user", ASCENDING)], "unique": True},
        {"keys": [("to_user", ASCENDING)]},
        {"keys": [("status", ASCENDING)]},
    ],
    Collections.INVITES: [
        {"keys": [("code", ASCENDING)], "unique": True},
        {"keys": [("server", ASCENDING)]},
        {"keys": [("created_by", ASCENDING)]},
        {"keys": [("expires_at", ASCENDING)], "expireAfterSeconds": TTL_GRACE_SECONDS},
    ],
}


def index_kind(index_def: dict[str, Any]) -> IndexKind:
    """Classify an index definition."""
    if index_def.get("unique"):
        return IndexKind.UNIQUE
    if "expireAfterSeconds" in index_def:
        return IndexKind.TTL
    if any(direction == TEXT for _, direction in index_def["keys"]):
        return IndexKind.TEXT
    return IndexKind.LOOKUP


def index_name(keys: list[tuple[str, Any]]) -> str:
    """Deterministic index name, same scheme the server uses by default."""
    return "_".join(f"{field}_{direction}" for field, direction in keys)


def unique_fields(collection_name: str) -> list[list[str]]:
    """Field sets that must be unique in a collection."""
    return [
        [field for field, _ in index_def["keys"]]
        for index_def in INDEXES.get(collection_name, [])
        if index_kind(index_def) is IndexKind.UNIQUE
    ]


def find_conflicts(
    collection: Collection,
    fields: list[str],
    limit: int = MAX_REPORTED_CONFLICTS,
) -> list[dict[str, Any]]:
    """
    Find values that appear more than once for a field set.

    Returns a list of ``{"value": {...}, "count": n}``, most duplicated first.
    """
    pipeline = [
        {"$group": {"_id": {f: f"${f}" for f in fields}, "count": {"$sum": 1}}},
        {"$match": {"count": {"$gt": 1}}},
        {"$sort": {"count": -1}},
        {"$limit": limit},
    ]
    return [
        {"value": row["_id"], "count": row["count"]}
        for row in collection.aggregate(pipeline)
    ]


def _create_index(collection: Collection, index_def: dict[str, Any]) -> str:
    keys = index_def["keys"]
    name = index_name(keys)
    kwargs = {k: v for k, v in index_def.items() if k != "keys"}
    fields = [field for field, _ in keys]

    try:
        return collection.create_index(keys, name=name, **kwargs)
    except DuplicateKeyError as e:
        try:
            conflicts = find_conflicts(collection, fields)
        except PyMongoError:
            logger.warning("Could not look up duplicates in %s(%s)", collection.name, fields)
            conflicts = []
        raise ConstraintConflictError(collection.name, fields, conflicts) from e
    except OperationFailure as e:
        if e.code in (INDEX_OPTIONS_CONFLICT, INDEX_KEY_SPECS_CONFLICT) or "already exists" in str(e):
            raise StructuralError(
                f"Index {collection.name}.{name} already exists with different options; "
                f"drop it so it can be recreated as {index_kind(index_def).value}: {e}",
                collection=collection.name,
            ) from e
        raise StructuralError(
            f"Cannot create index {collection.name}.{name}: {e}",
            collection=collection.name,
        ) from e
    except PyMongoError as e:
        raise StructuralError(
            f"Cannot create index {collection.name}.{name}: {e}",
            collection=collection.name,
        ) from e


def ensure_indexes(db: Database) -> list[str]:
    """
    Create every declared index that is missing.

    Re-creating an index that already exists with the same keys and options
    is a no-op on the server, so this is safe to run any number of times and
    alongside live traffic.

    Returns:
        Ensured indexes as ``"<collection>.<index name>"``, in declaration order

    Raises:
        ConstraintConflictError: If existing data violates a unique index
        StructuralError: If an index can't be created for any other reason
    """
    ensured = []
    for collection_name, indexes in INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            name = _create_index(collection, index_def)
            ensured.append(f"{collection_name}.{name}")
            logger.debug("Ensured %s index %s.%s", index_kind(index_def).value, collection_name, name)

    return ensured
