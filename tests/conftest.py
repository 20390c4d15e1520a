"""
Global test fixtures for stoatdb.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock)
- Bootstrapped and empty stoatchat databases
- A user factory and a fully populated server
"""

import sys
from datetime import datetime, timezone, timedelta
from pathlib import Path

import pytest

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """
    Create a mock MongoDB client using mongomock.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes, including unique indexes and TTL expiry on read.
    """
    import mongomock
    client = mongomock.MongoClient(tz_aware=True)
    yield client
    client.close()


@pytest.fixture
def mock_db(mock_mongo_client):
    """Provide an empty mock stoatchat database."""
    yield mock_mongo_client["stoatchat"]


@pytest.fixture
def bootstrapped_db(mock_db):
    """Provide a mock stoatchat database after one full bootstrap run."""
    from stoatdb.services.bootstrap import bootstrap

    bootstrap(mock_db)
    yield mock_db


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from a fresh environment."""
    from stoatdb.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def now() -> datetime:
    """A fixed aware timestamp, truncated to MongoDB's millisecond precision."""
    return datetime(2026, 10, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_user():
    """Factory for regular users with unique usernames and emails."""
    from stoatdb.models.user import User

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "password": "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.qOZ3q7K9V6X6Hy",
            "discriminator": f"{1000 + n:04d}",
        }
        fields.update(overrides)
        return User(**fields)

    return _make


@pytest.fixture
def server_tree(bootstrapped_db):
    """
    A server with one channel, two messages (one with an attachment), an
    emoji, a membership and an invite, all inserted into the store.

    Returns a dict of the inserted ids.
    """
    from stoatdb.database.documents import insert_record
    from stoatdb.models import (
        Attachment,
        Channel,
        Emoji,
        Invite,
        Message,
        Server,
        ServerMember,
    )

    owner = bootstrapped_db.users.find_one({"username": "admin"})["_id"]
    server = Server(owner=owner, name="Lounge")
    channel = Channel(server=server.id, name="general")
    first = Message(channel=channel.id, server=server.id, author=owner, content="hello world")
    second = Message(channel=channel.id, server=server.id, author=owner, content="second")
    attachment = Attachment(message_id=first.id, filename="cat.png", size=1024)
    emoji = Emoji(server=server.id, name="party")
    member = ServerMember(server=server.id, user=owner)
    invite = Invite(
        code="lounge",
        server=server.id,
        created_by=owner,
        expires_at=datetime.now(timezone.utc) + timedelta(days=7),
    )

    for record in (server, channel, first, second, attachment, emoji, member, invite):
        assert insert_record(bootstrapped_db, record).status.value == "inserted"

    return {
        "owner": owner,
        "server": server.id,
        "channel": channel.id,
        "messages": [first.id, second.id],
        "attachment": attachment.id,
        "emoji": emoji.id,
        "member": member.id,
        "invite": invite.id,
    }
