"""
Tests for cognitive_insights/models/.

What we test
------------
InsightItem:
  - Frozen; strict types (non-string area rejected).

UserInsightsResult:
  - Defaults: empty lists, id / created_at / assessment_id None.
  - More than 3 strengths or weaknesses rejected.
  - An area in both lists rejected.
  - JSON dump keeps the area/description shape.

AssessmentRecord / InteractionRecord:
  - value_for() reads the named dimension.
  - ISO timestamps parse; feedback must be a known value or None.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from cognitive_insights.models.assessment import AssessmentRecord, InteractionRecord
from cognitive_insights.models.insight import InsightItem, UserInsightsResult
from cognitive_insights.taxonomy.dimensions import (
    DIMENSION_CATALOG,
    CognitiveDimension,
    TechniqueFeedback,
    area_name,
)


def _items(*areas: str) -> list[InsightItem]:
    return [InsightItem(area=a, description="d") for a in areas]


class TestInsightItem:
    def test_frozen(self):
        item = InsightItem(area="Creativity", description="d")
        with pytest.raises(ValidationError):
            item.area = "Focus"

    def test_non_string_area_rejected(self):
        with pytest.raises(ValidationError):
            InsightItem(area=3, description="d")


class TestUserInsightsResult:
    def test_defaults(self):
        result = UserInsightsResult(general_insight="x")
        assert result.strengths == []
        assert result.weaknesses == []
        assert result.id is None
        assert result.created_at is None
        assert result.assessment_id is None

    @pytest.mark.parametrize("field", ["strengths", "weaknesses"])
    def test_more_than_three_items_rejected(self, field):
        with pytest.raises(ValidationError, match="At most 3"):
            UserInsightsResult(general_insight="x", **{field: _items("A", "B", "C", "D")})

    def test_overlapping_areas_rejected(self):
        with pytest.raises(ValidationError, match="both strength and weakness"):
            UserInsightsResult(
                general_insight="x",
                strengths=_items("Creativity"),
                weaknesses=_items("Creativity", "Organization"),
            )

    def test_json_dump_shape(self):
        result = UserInsightsResult(
            general_insight="x",
            strengths=_items("Creativity"),
            created_at=datetime(2024, 3, 5, tzinfo=timezone.utc),
        )
        dumped = result.model_dump(mode="json")
        assert dumped["strengths"] == [{"area": "Creativity", "description": "d"}]
        assert dumped["created_at"].startswith("2024-03-05T00:00:00")


class TestAssessmentRecord:
    def test_value_for_every_dimension(self, make_assessment):
        record = make_assessment(default=10, organization=77)
        assert record.value_for(CognitiveDimension.ORGANIZATION) == 77
        assert record.value_for(CognitiveDimension.CREATIVITY) == 10

    def test_missing_dimension_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentRecord(id="a1", completed_at="2024-03-05T10:00:00Z", creativity_score=5)

    def test_catalog_covers_all_fields(self):
        fields = set(AssessmentRecord.model_fields) - {"id", "completed_at"}
        assert fields == {d.value for d in DIMENSION_CATALOG}

    def test_area_names(self):
        assert area_name(CognitiveDimension.CREATIVITY) == "Creativity"
        assert area_name(CognitiveDimension.TIME_AWARENESS) == "Time Awareness"


class TestInteractionRecord:
    def _row(self, **overrides):
        row = {
            "technique_id": "t1",
            "technique_title": "Pomodoro",
            "feedback": "not-helpful",
            "created_at": "2024-03-05T10:00:00Z",
        }
        row.update(overrides)
        return row

    def test_parses_valid_row(self):
        record = InteractionRecord.model_validate(self._row())
        assert record.feedback is TechniqueFeedback.NOT_HELPFUL
        assert record.created_at.tzinfo is not None

    def test_none_feedback_allowed(self):
        assert InteractionRecord.model_validate(self._row(feedback=None)).feedback is None

    def test_unknown_feedback_rejected(self):
        with pytest.raises(ValidationError):
            InteractionRecord.model_validate(self._row(feedback="meh"))

    def test_feedback_key_required(self):
        row = self._row()
        del row["feedback"]
        with pytest.raises(ValidationError):
            InteractionRecord.model_validate(row)
