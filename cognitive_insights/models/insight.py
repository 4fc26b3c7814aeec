"""
Insight output models.

``InsightItem`` is the (area, description) pair shown to the user and the only
shape persisted alongside the narrative string.

``UserInsightsResult`` is the engine's result object. ``id`` and
``created_at`` are only populated once the persistence collaborator has
stored the result; an unsaved result leaves both as ``None``.

``SavedInsight`` is what the store hands back after a successful save.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

MAX_INSIGHT_ITEMS = 3


class InsightItem(BaseModel):
    """A named cognitive area with a natural-language description."""

    model_config = ConfigDict(frozen=True, strict=True)

    area: str
    description: str


class UserInsightsResult(BaseModel):
    """Strengths, weaknesses and narrative derived from one assessment.

    Attributes:
        id: Store-assigned identifier, or ``None`` if not persisted.
        strengths: Up to 3 strength items, strongest first.
        weaknesses: Up to 3 growth items, most in need of attention first.
        general_insight: The narrative summary sentence.
        created_at: Store-assigned creation time, or ``None``.
        assessment_id: The assessment this result was derived from.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    strengths: list[InsightItem] = []
    weaknesses: list[InsightItem] = []
    general_insight: str
    created_at: Optional[datetime] = None
    assessment_id: Optional[str] = None

    @field_validator("strengths", "weaknesses")
    @classmethod
    def validate_item_cap(cls, v: list[InsightItem]) -> list[InsightItem]:
        if len(v) > MAX_INSIGHT_ITEMS:
            raise ValueError(
                f"At most {MAX_INSIGHT_ITEMS} insight items allowed, got {len(v)}."
            )
        return v

    @model_validator(mode="after")
    def validate_disjoint_areas(self) -> "UserInsightsResult":
        overlap = {s.area for s in self.strengths} & {w.area for w in self.weaknesses}
        if overlap:
            raise ValueError(
                f"Areas cannot be both strength and weakness: {sorted(overlap)}."
            )
        return self


class SavedInsight(BaseModel):
    """Identifier and creation time returned by a successful save."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
