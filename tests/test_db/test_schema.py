"""
Tests for cognitive_insights/db/schema.py and db/connection.py.

What we test
------------
  - apply_schema() creates every table in ALL_TABLE_NAMES.
  - apply_schema() is idempotent.
  - get_connection() creates parent directories, enforces foreign keys,
    commits on clean exit and rolls back on error.
  - WAL journaling on disk only; busy_timeout applied.
"""

from __future__ import annotations

import sqlite3

import pytest

from cognitive_insights.db.connection import get_connection
from cognitive_insights.db.schema import ALL_TABLE_NAMES, apply_schema, get_existing_tables


class TestApplySchema:
    def test_all_tables_created(self, in_memory_db):
        existing = get_existing_tables(in_memory_db)
        for table in ALL_TABLE_NAMES:
            assert table in existing

    def test_idempotent(self, in_memory_db):
        apply_schema(in_memory_db)
        apply_schema(in_memory_db)
        existing = get_existing_tables(in_memory_db)
        assert set(ALL_TABLE_NAMES) <= set(existing)


class TestGetConnection:
    def test_creates_parent_dirs(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        with get_connection(str(db_path)) as conn:
            apply_schema(conn)
        assert db_path.exists()

    def test_wal_on_disk_only(self, tmp_path):
        with get_connection(str(tmp_path / "wal.db")) as conn:
            assert conn.execute("PRAGMA journal_mode;").fetchone()[0] == "wal"
            assert conn.execute("PRAGMA busy_timeout;").fetchone()[0] == 5000
        with get_connection(":memory:") as conn:
            assert conn.execute("PRAGMA journal_mode;").fetchone()[0] == "memory"

    def test_foreign_keys_enforced(self, tmp_path):
        with get_connection(str(tmp_path / "fk.db")) as conn:
            apply_schema(conn)
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    """
                    INSERT INTO user_insight_history
                        (id, user_id, general_insight, assessment_id, created_at)
                    VALUES ('h1', 'u1', 'x', 'missing', '2024-01-01T00:00:00');
                    """
                )

    def test_commit_on_clean_exit(self, tmp_path):
        db_path = str(tmp_path / "commit.db")
        with get_connection(db_path) as conn:
            apply_schema(conn)
            conn.execute(
                "INSERT INTO technique_interactions (user_id, technique_id) VALUES ('u1', 't1');"
            )
        with get_connection(db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM technique_interactions").fetchone()[0]
        assert count == 1

    def test_rollback_on_error(self, tmp_path):
        db_path = str(tmp_path / "rollback.db")
        with get_connection(db_path) as conn:
            apply_schema(conn)

        with pytest.raises(RuntimeError):
            with get_connection(db_path) as conn:
                conn.execute(
                    "INSERT INTO technique_interactions (user_id) VALUES ('u1');"
                )
                raise RuntimeError("boom")

        with get_connection(db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM technique_interactions").fetchone()[0]
        assert count == 0
