"""Tests for the migration and auth log maintenance runner."""

import pytest
from unittest.mock import MagicMock

import run_migrations
from run_migrations import (
    checksum_of,
    discover_migrations,
    pending_migrations,
    purge_auth_logs,
)


def mock_connection(rows=(), rowcount=0):
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchall.return_value = list(rows)
    cursor.rowcount = rowcount
    return conn, cursor


class TestDiscovery:
    def test_finds_auth_logs_migration(self):
        """The shipped migrations are discovered in name order."""
        names = [m.name for m in discover_migrations()]
        assert names[0] == "001_create_auth_logs.sql"
        assert names == sorted(names)

    def test_checksum_is_stable(self, tmp_path):
        """Same content gives the same short checksum."""
        path = tmp_path / "001_test.sql"
        path.write_text("SELECT 1;")
        assert checksum_of(path) == checksum_of(path)
        assert len(checksum_of(path)) == 16

    def test_missing_directory(self, tmp_path, monkeypatch):
        """A missing migrations directory yields nothing."""
        monkeypatch.setattr(run_migrations, "MIGRATIONS_DIR", tmp_path / "absent")
        assert discover_migrations() == []


class TestPending:
    def test_unapplied_are_pending(self, tmp_path, monkeypatch):
        """Only migrations without a recorded row are pending."""
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        monkeypatch.setattr(run_migrations, "MIGRATIONS_DIR", tmp_path)
        applied_checksum = checksum_of(tmp_path / "001_a.sql")
        conn, _ = mock_connection(rows=[("001_a.sql", applied_checksum, None)])

        assert [m.name for m in pending_migrations(conn)] == ["002_b.sql"]

    def test_changed_migration_is_not_reapplied(self, tmp_path, monkeypatch):
        """An edited, already-applied file only produces a warning."""
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        monkeypatch.setattr(run_migrations, "MIGRATIONS_DIR", tmp_path)
        conn, _ = mock_connection(rows=[("001_a.sql", "stale", None)])

        assert pending_migrations(conn) == []


class TestPurge:
    def test_deletes_and_commits(self):
        """Purge removes rows older than the cutoff and commits."""
        conn, cursor = mock_connection(rowcount=4)

        assert purge_auth_logs(conn, 30) == 4
        sql, params = cursor.execute.call_args.args
        assert "DELETE FROM auth_logs" in sql
        assert params == (30,)
        conn.commit.assert_called_once()

    def test_rejects_non_positive_days(self):
        """Less than one day exits without touching the database."""
        conn, cursor = mock_connection()

        with pytest.raises(SystemExit):
            purge_auth_logs(conn, 0)
        cursor.execute.assert_not_called()
