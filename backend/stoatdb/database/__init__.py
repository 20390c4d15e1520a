"""
Database module - MongoDB connection, collection registry and index definitions.
"""
from stoatdb.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from stoatdb.database.collections import Collections, DB_MANIFEST, ensure_collections
from stoatdb.database.indexes import INDEXES, IndexKind, ensure_indexes

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "Collections",
    "DB_MANIFEST",
    "ensure_collections",
    "INDEXES",
    "IndexKind",
    "ensure_indexes",
]
