"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with stand-ins for a MongoDB
server that fails in specific ways, which mongomock can't reproduce.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Failing Database Fixtures
# =============================================================================

@pytest.fixture
def unreachable_db():
    """
    A database whose every call times out like an unreachable server.
    """
    db = MagicMock()
    db.name = "stoatchat"
    error = ServerSelectionTimeoutError("mongodb:27017: [Errno 111] Connection refused")
    db.list_collection_names.side_effect = error
    db.create_collection.side_effect = error
    db.__getitem__.return_value.create_index.side_effect = error
    db.__getitem__.return_value.insert_one.side_effect = error
    return db


@pytest.fixture
def unauthorized_error():
    """The error a server returns for a user without write permission."""
    return OperationFailure(
        "not authorized on stoatchat to execute command",
        code=13,
        details={"ok": 0, "errmsg": "not authorized", "code": 13, "codeName": "Unauthorized"},
    )
