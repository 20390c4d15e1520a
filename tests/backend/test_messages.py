"""
Tests for the read paths backed by the declared indexes.

mongomock has no $text support, so full-text search is only checked at the
query-shape level against a MagicMock. That a stored "hello world" message
is found by searching "hello" is not exercised end to end here; it needs a
real MongoDB with the text index on messages.content.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from bson import ObjectId


class TestSearchMessages:
    """Tests for full-text search over message content."""

    def test_builds_text_query(self):
        """search_messages should use the $text operator."""
        from stoatdb.services.messages import search_messages

        db = MagicMock()
        cursor = db.__getitem__.return_value.find.return_value
        cursor.sort.return_value.limit.return_value = []

        search_messages(db, "hello")

        db.__getitem__.assert_called_with("messages")
        db.__getitem__.return_value.find.assert_called_once_with({"$text": {"$search": "hello"}})
        cursor.sort.assert_called_once_with("created_at", -1)
        cursor.sort.return_value.limit.assert_called_once_with(50)

    def test_search_restricted_to_channel(self):
        """A channel narrows the search."""
        from stoatdb.services.messages import search_messages

        db = MagicMock()
        db.__getitem__.return_value.find.return_value.sort.return_value.limit.return_value = []
        channel = ObjectId()

        search_messages(db, "hello", channel=channel, limit=10)

        db.__getitem__.return_value.find.assert_called_once_with(
            {"$text": {"$search": "hello"}, "channel": channel}
        )

    def test_matching_documents_become_messages(self):
        """Results are validated into Message records."""
        from stoatdb.models import Message
        from stoatdb.services.messages import search_messages

        doc = {
            "_id": ObjectId(),
            "channel": ObjectId(),
            "server": ObjectId(),
            "author": ObjectId(),
            "content": "hello world",
            "created_at": datetime.now(timezone.utc),
            "edited_at": None,
        }
        db = MagicMock()
        db.__getitem__.return_value.find.return_value.sort.return_value.limit.return_value = [doc]

        results = search_messages(db, "hello")

        assert len(results) == 1
        assert isinstance(results[0], Message)
        assert results[0].content == "hello world"


class TestListChannelMessages:
    """Tests for channel history."""

    def test_newest_first(self, bootstrapped_db):
        """Messages come back ordered by created_at descending."""
        from stoatdb.database.documents import insert_record
        from stoatdb.models import Message
        from stoatdb.services.messages import list_channel_messages

        channel, server, author = ObjectId(), ObjectId(), ObjectId()
        start = datetime(2026, 10, 1, tzinfo=timezone.utc)
        for minute in (0, 2, 1):
            insert_record(
                bootstrapped_db,
                Message(
                    channel=channel,
                    server=server,
                    author=author,
                    content=f"minute {minute}",
                    created_at=start + timedelta(minutes=minute),
                ),
            )
        insert_record(
            bootstrapped_db,
            Message(channel=ObjectId(), server=server, author=author, content="elsewhere"),
        )

        messages = list_channel_messages(bootstrapped_db, channel)

        assert [m.content for m in messages] == ["minute 2", "minute 1", "minute 0"]

    def test_limit(self, bootstrapped_db, server_tree):
        """Only the requested number of messages is returned."""
        from stoatdb.services.messages import list_channel_messages

        messages = list_channel_messages(bootstrapped_db, server_tree["channel"], limit=1)

        assert len(messages) == 1

    def test_documents_with_unknown_fields_are_read(self, bootstrapped_db):
        """A message carrying a field the model doesn't declare is still listed."""
        from stoatdb.services.messages import list_channel_messages

        channel = ObjectId()
        bootstrapped_db.messages.insert_one({
            "_id": ObjectId(),
            "channel": channel,
            "server": ObjectId(),
            "author": ObjectId(),
            "content": "sent from a newer client",
            "nonce": "abc",
            "created_at": datetime(2026, 10, 1, tzinfo=timezone.utc),
        })

        messages = list_channel_messages(bootstrapped_db, channel)

        assert [m.content for m in messages] == ["sent from a newer client"]


class TestFindSession:
    """Tests for session lookup by token."""

    def test_live_session_found(self, bootstrapped_db):
        """A session before its expiry is returned."""
        from stoatdb.database.documents import insert_record
        from stoatdb.models import Session
        from stoatdb.services.messages import find_session

        session = Session(
            user_id=ObjectId(),
            token="tok",
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )
        insert_record(bootstrapped_db, session)

        found = find_session(bootstrapped_db, "tok")

        assert found is not None
        assert found.id == session.id

    def test_expired_session_not_returned(self, mock_db):
        """Expired sessions are filtered even before the TTL sweep removes them."""
        from stoatdb.services.messages import find_session

        # No TTL index here, so the document is still stored
        mock_db.sessions.insert_one({
            "_id": ObjectId(),
            "user_id": ObjectId(),
            "token": "stale",
            "name": None,
            "expires_at": datetime.now(timezone.utc) - timedelta(minutes=5),
        })

        assert mock_db.sessions.count_documents({"token": "stale"}) == 1
        assert find_session(mock_db, "stale") is None

    def test_unknown_token(self, bootstrapped_db):
        """Unknown tokens find nothing."""
        from stoatdb.services.messages import find_session

        assert find_session(bootstrapped_db, "nope") is None
