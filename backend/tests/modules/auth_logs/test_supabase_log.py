"""Tests for the database-backed auth event log."""

import logging

import pytest
from unittest.mock import MagicMock

from modules.auth_logs.models import AuthEventCreate, AuthEventType, AuthLogFilter
from modules.auth_logs.repository import STATS_FUNCTION, TABLE, SupabaseAuthEventLog


def create_mock_row(
    row_id: int = 1,
    user_id: str = "user-123",
    event: str = "sign_in",
    created_at: str = "2025-01-01T12:00:00+00:00",
) -> dict:
    """Helper to create an auth_logs row as PostgREST returns it."""
    return {
        "id": row_id,
        "user_id": user_id,
        "user_email": "user@example.com",
        "user_name": "Test User",
        "event": event,
        "ip_address": "1.2.3.4",
        "user_agent": None,
        "metadata": None,
        "created_at": created_at,
    }


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repo(mock_db):
    return SupabaseAuthEventLog(mock_db)


class TestRecord:
    @pytest.mark.asyncio
    async def test_inserts_row(self, repo, mock_db):
        """Should insert a row and map the stored result."""
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_row(row_id=7)
        ]

        stored = await repo.record(
            AuthEventCreate(user_id="user-123", event=AuthEventType.SIGN_IN, ip_address="1.2.3.4")
        )

        mock_db.table.assert_called_with(TABLE)
        row = mock_db.table.return_value.insert.call_args[0][0]
        assert row["event"] == "sign_in"
        assert row["user_id"] == "user-123"
        assert "created_at" not in row
        assert stored.id == "7"
        assert stored.user_agent == "unknown"

    @pytest.mark.asyncio
    async def test_swallows_database_errors(self, repo, mock_db):
        """A failed insert returns None instead of raising."""
        mock_db.table.return_value.insert.return_value.execute.side_effect = Exception("timeout")

        assert await repo.record(AuthEventCreate(event=AuthEventType.SIGN_OUT)) is None

    @pytest.mark.asyncio
    async def test_dropped_event_is_logged_locally(self, repo, mock_db, caplog):
        """A failed insert still leaves the event in the application log."""
        mock_db.table.return_value.insert.return_value.execute.side_effect = Exception("timeout")

        with caplog.at_level(logging.INFO):
            await repo.record(
                AuthEventCreate(event=AuthEventType.SIGN_OUT, user_email="a@example.com", ip_address="1.2.3.4")
            )

        assert "dropping it" in caplog.text
        assert "[AUTH LOG] sign_out user=a@example.com ip=1.2.3.4" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_insert_response(self, repo, mock_db):
        """A returned row that cannot be mapped yields None instead of raising."""
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            {"user_id": "user-123", "event": "not_an_event"}
        ]

        assert await repo.record(AuthEventCreate(event=AuthEventType.SIGN_IN)) is None

    @pytest.mark.asyncio
    async def test_empty_result(self, repo, mock_db):
        """An insert that returns no rows yields None."""
        mock_db.table.return_value.insert.return_value.execute.return_value.data = []

        assert await repo.record(AuthEventCreate(event=AuthEventType.SIGN_IN)) is None


class TestQuery:
    @pytest.mark.asyncio
    async def test_unfiltered_newest_first(self, repo, mock_db):
        """Should order by created_at descending and apply the limit."""
        select = mock_db.table.return_value.select.return_value
        select.order.return_value.limit.return_value.execute.return_value.data = [
            create_mock_row(row_id=2),
            create_mock_row(row_id=1),
        ]

        events = await repo.query(AuthLogFilter(), limit=25)

        select.order.assert_called_once_with("created_at", desc=True)
        select.order.return_value.limit.assert_called_once_with(25)
        assert [e.id for e in events] == ["2", "1"]

    @pytest.mark.asyncio
    async def test_user_filter_takes_precedence(self, repo, mock_db):
        """Only the user_id criterion is applied when both are set."""
        select = mock_db.table.return_value.select.return_value
        select.eq.return_value.order.return_value.limit.return_value.execute.return_value.data = []

        await repo.query(AuthLogFilter(user_id="u1", event=AuthEventType.SIGN_UP))

        select.eq.assert_called_once_with("user_id", "u1")

    @pytest.mark.asyncio
    async def test_event_filter(self, repo, mock_db):
        """The event criterion filters on the event column."""
        select = mock_db.table.return_value.select.return_value
        select.eq.return_value.order.return_value.limit.return_value.execute.return_value.data = [
            create_mock_row(event="failed_auth")
        ]

        events = await repo.get_failed_attempts()

        select.eq.assert_called_once_with("event", "failed_auth")
        assert events[0].event == AuthEventType.FAILED_AUTH

    @pytest.mark.asyncio
    async def test_query_error_returns_empty(self, repo, mock_db):
        """Database failures degrade to an empty list."""
        mock_db.table.side_effect = Exception("connection refused")

        assert await repo.query(AuthLogFilter()) == []


class TestStats:
    @pytest.mark.asyncio
    async def test_uses_stats_function(self, repo, mock_db):
        """Aggregates come from the stats function in one call."""
        mock_db.rpc.return_value.execute.return_value.data = {
            "total_logs": 3,
            "event_counts": {"sign_in": 2, "failed_auth": 1},
            "unique_users": 2,
        }
        select = mock_db.table.return_value.select.return_value
        select.order.return_value.limit.return_value.execute.return_value.data = [
            create_mock_row()
        ]

        stats = await repo.stats()

        mock_db.rpc.assert_called_once_with(STATS_FUNCTION, {})
        assert stats.total_logs == 3
        assert stats.event_counts == {"sign_in": 2, "failed_auth": 1}
        assert stats.unique_users == 2
        assert len(stats.recent_activity) == 1
        select.order.return_value.limit.assert_called_once_with(10)

    @pytest.mark.asyncio
    async def test_accepts_list_result(self, repo, mock_db):
        """A single-row list result is unwrapped."""
        mock_db.rpc.return_value.execute.return_value.data = [{"total_logs": 5}]

        stats = await repo.stats()

        assert stats.total_logs == 5
        assert stats.event_counts == {}

    @pytest.mark.asyncio
    async def test_error_returns_empty_stats(self, repo, mock_db):
        """A failed stats call yields zeroed statistics."""
        mock_db.rpc.side_effect = Exception("boom")

        stats = await repo.stats()

        assert stats.total_logs == 0
        assert stats.recent_activity == []


class TestPurge:
    @pytest.mark.asyncio
    async def test_deletes_before_cutoff(self, repo, mock_db):
        """Rows older than the cutoff are deleted and counted."""
        delete = mock_db.table.return_value.delete.return_value
        delete.lt.return_value.execute.return_value.data = [create_mock_row(), create_mock_row(2)]

        removed = await repo.purge(30)

        assert removed == 2
        column, cutoff = delete.lt.call_args[0]
        assert column == "created_at"
        assert "T" in cutoff

    @pytest.mark.asyncio
    async def test_purge_error_returns_zero(self, repo, mock_db):
        """A failed purge removes nothing."""
        mock_db.table.return_value.delete.side_effect = Exception("boom")

        assert await repo.purge(30) == 0
