"""
Shared pytest fixtures for the Cognitive Insights test suite.

Provides:
  - ``in_memory_db``: per-test ``:memory:`` connection with every table
    created and foreign keys on.
  - ``make_assessment``: factory for ``AssessmentRecord`` objects with every
    dimension defaulting to one value.
  - ``FixedChoice``: stand-in random source that always picks one index.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest

from cognitive_insights.db.schema import apply_schema
from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.taxonomy.dimensions import DIMENSION_CATALOG

BASE_TIME = datetime(2024, 3, 5, 10, 0, 0, tzinfo=timezone.utc)


class FixedChoice:
    """Duck-typed ``random.Random`` whose ``choice`` returns ``seq[index]``."""

    def __init__(self, index: int = 0) -> None:
        self.index = index

    def choice(self, seq):
        return seq[self.index]


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the full schema applied."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    apply_schema(conn)
    yield conn
    conn.close()


# ── Sample record factories ───────────────────────────────────────────────────

def build_assessment(
    record_id: str = "a1",
    default: int = 50,
    days_ago: int = 0,
    **overrides: int,
) -> AssessmentRecord:
    values = {d.value: default for d in DIMENSION_CATALOG}
    values.update(overrides)
    return AssessmentRecord(
        id=record_id,
        completed_at=BASE_TIME - timedelta(days=days_ago),
        **values,
    )


@pytest.fixture
def make_assessment() -> Callable[..., AssessmentRecord]:
    """Factory: ``make_assessment("a1", default=80, creativity_score=85)``."""
    return build_assessment


@pytest.fixture
def history_of(make_assessment) -> Callable[..., list[AssessmentRecord]]:
    """Factory: newest-first history where every dimension takes ``values[i]``."""

    def _build(values: list[int]) -> list[AssessmentRecord]:
        return [
            make_assessment(f"a{i}", default=v, days_ago=i)
            for i, v in enumerate(values)
        ]

    return _build


@pytest.fixture
def fixed_choice() -> type[FixedChoice]:
    """The ``FixedChoice`` class, for pinning narrative template selection."""
    return FixedChoice
