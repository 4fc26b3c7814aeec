"""
Tests for cognitive_insights/db/repositories/.

What we test
------------
AssessmentRepository:
  - upsert + get_for_user round trip, newest first, scoped to the user.
  - upsert replaces an existing id.
  - completed_at stored in UTC so mixed offsets still sort newest first.

TechniqueInteractionRepository:
  - Nullable columns stored as-is; default created_at filled in.
  - get_for_user returns raw dicts, newest first.

InsightHistoryRepository:
  - insert returns a SavedInsight with a UUID id.
  - strengths / weaknesses stored as JSON text.
  - get_recent honours the limit and orders newest first.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timedelta, timezone

from cognitive_insights.db.repositories.assessment_repo import (
    AssessmentRepository,
    TechniqueInteractionRepository,
)
from cognitive_insights.db.repositories.insight_repo import InsightHistoryRepository
from cognitive_insights.models.insight import InsightItem


class TestAssessmentRepository:
    def test_round_trip_newest_first(self, in_memory_db, make_assessment):
        repo = AssessmentRepository(in_memory_db)
        repo.upsert("u1", make_assessment("old", default=40, days_ago=5))
        repo.upsert("u1", make_assessment("new", default=60))
        repo.upsert("u2", make_assessment("other", default=90))

        records = repo.get_for_user("u1")
        assert [r.id for r in records] == ["new", "old"]
        assert records[0] == make_assessment("new", default=60)

    def test_upsert_replaces(self, in_memory_db, make_assessment):
        repo = AssessmentRepository(in_memory_db)
        repo.upsert("u1", make_assessment("a1", default=40))
        repo.upsert("u1", make_assessment("a1", default=40, creativity_score=99))
        records = repo.get_for_user("u1")
        assert len(records) == 1
        assert records[0].creativity_score == 99

    def test_unknown_user_empty(self, in_memory_db):
        assert AssessmentRepository(in_memory_db).get_for_user("nobody") == []


    def test_mixed_offsets_sort_chronologically(self, in_memory_db, make_assessment):
        repo = AssessmentRepository(in_memory_db)
        older = make_assessment("older").model_copy(
            update={"completed_at": datetime(2024, 3, 6, 1, 0, tzinfo=timezone.utc)}
        )
        # 23:00 at -05:00 is 04:00 UTC on the 6th, three hours after "older"
        newer = make_assessment("newer").model_copy(
            update={
                "completed_at": datetime(
                    2024, 3, 5, 23, 0, tzinfo=timezone(timedelta(hours=-5))
                )
            }
        )
        repo.upsert("u1", older)
        repo.upsert("u1", newer)

        records = repo.get_for_user("u1")
        assert [r.id for r in records] == ["newer", "older"]
        assert records[0].completed_at == newer.completed_at
        assert records[0].completed_at.utcoffset() == timedelta(0)


class TestTechniqueInteractionRepository:
    def test_nullable_columns_and_default_timestamp(self, in_memory_db):
        repo = TechniqueInteractionRepository(in_memory_db)
        repo.insert("u1", None, None, None)
        rows = repo.get_for_user("u1")
        assert len(rows) == 1
        assert rows[0]["technique_id"] is None
        assert rows[0]["feedback"] is None
        assert rows[0]["created_at"]

    def test_newest_first(self, in_memory_db):
        repo = TechniqueInteractionRepository(in_memory_db)
        repo.insert("u1", "t1", "Old", "helpful", created_at="2024-01-01T00:00:00Z")
        repo.insert_raw(
            "u1",
            {"technique_id": "t2", "technique_title": "New",
             "feedback": "not-helpful", "created_at": "2024-02-01T00:00:00Z"},
        )
        rows = repo.get_for_user("u1")
        assert [r["technique_id"] for r in rows] == ["t2", "t1"]
        assert set(rows[0]) == {"technique_id", "technique_title", "feedback", "created_at"}


class TestInsightHistoryRepository:
    def _insert(self, repo, user_id="u1", text="x"):
        return repo.insert(
            user_id=user_id,
            general_insight=text,
            strengths=[InsightItem(area="Creativity", description="Good.")],
            weaknesses=[],
            assessment_id=None,
        )

    def test_insert_returns_saved_insight(self, in_memory_db):
        saved = self._insert(InsightHistoryRepository(in_memory_db))
        assert uuid.UUID(saved.id).version == 4
        assert saved.created_at.tzinfo is not None

    def test_items_stored_as_json(self, in_memory_db):
        repo = InsightHistoryRepository(in_memory_db)
        self._insert(repo)
        row = repo.get_recent("u1")[0]
        assert json.loads(row["strengths"]) == [{"area": "Creativity", "description": "Good."}]
        assert json.loads(row["weaknesses"]) == []

    def test_get_recent_limit_and_order(self, in_memory_db):
        repo = InsightHistoryRepository(in_memory_db)
        for i in range(4):
            in_memory_db.execute(
                """
                INSERT INTO user_insight_history (id, user_id, general_insight, created_at)
                VALUES (?, 'u1', ?, ?);
                """,
                (f"h{i}", f"insight {i}", f"2024-03-0{i + 1}T00:00:00+00:00"),
            )
        rows = repo.get_recent("u1", limit=2)
        assert [r["id"] for r in rows] == ["h3", "h2"]
