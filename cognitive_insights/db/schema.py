"""
DDL for the insight store.

  assessment_results      one row per completed assessment (8 score columns)
  technique_interactions  technique feedback; technique / feedback columns are
                          nullable since older rows can be incomplete and the
                          analysis layer filters them on read
  user_insight_history    generated insights; ``strengths`` / ``weaknesses``
                          hold JSON arrays of {"area", "description"} objects

Every statement is ``IF NOT EXISTS``, so ``apply_schema()`` can run on every
start-up and in each test.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

_UTC_NOW = "(strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))"

SCHEMA_STATEMENTS: tuple[str, ...] = (
    f"""
    CREATE TABLE IF NOT EXISTS assessment_results (
        id                    TEXT    PRIMARY KEY,
        user_id               TEXT    NOT NULL,
        completed_at          TEXT    NOT NULL,
        creativity_score      INTEGER NOT NULL,
        problem_solving       INTEGER NOT NULL,
        pattern_recognition   INTEGER NOT NULL,
        focus_duration        INTEGER NOT NULL,
        task_switching        INTEGER NOT NULL,
        emotional_regulation  INTEGER NOT NULL,
        organization          INTEGER NOT NULL,
        time_awareness        INTEGER NOT NULL,
        imported_at           TEXT    NOT NULL DEFAULT {_UTC_NOW}
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_assessment_results_user
        ON assessment_results (user_id, completed_at)
    """,
    f"""
    CREATE TABLE IF NOT EXISTS technique_interactions (
        interaction_id   INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id          TEXT    NOT NULL,
        technique_id     TEXT,
        technique_title  TEXT,
        feedback         TEXT,
        created_at       TEXT    NOT NULL DEFAULT {_UTC_NOW}
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_technique_interactions_user
        ON technique_interactions (user_id, created_at)
    """,
    """
    CREATE TABLE IF NOT EXISTS user_insight_history (
        id               TEXT    PRIMARY KEY,
        user_id          TEXT    NOT NULL,
        general_insight  TEXT    NOT NULL,
        strengths        TEXT    NOT NULL DEFAULT '[]',
        weaknesses       TEXT    NOT NULL DEFAULT '[]',
        assessment_id    TEXT    REFERENCES assessment_results(id),
        created_at       TEXT    NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_user_insight_history_user
        ON user_insight_history (user_id, created_at)
    """,
)

ALL_TABLE_NAMES = [
    "assessment_results",
    "technique_interactions",
    "user_insight_history",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Create any missing tables and indexes, then commit."""
    for statement in SCHEMA_STATEMENTS:
        conn.execute(statement)
    conn.commit()
    logger.debug("Schema verified (%d tables).", len(ALL_TABLE_NAMES))


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Names of all tables in ``conn``, alphabetical. Includes SQLite internals."""
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")
    return [name for (name,) in cursor.fetchall()]
