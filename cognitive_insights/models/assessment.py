"""
Input records consumed by the analysis engine.

``AssessmentRecord`` is one completed cognitive assessment: an identifier, a
completion timestamp, and the 8 integer dimension scores. Values are intended
to fall in 0–100 but the engine does not enforce that range.

``InteractionRecord`` is one piece of technique feedback. Interaction rows come
from a denormalized store and may be malformed; ``parse_interactions()`` in
``cognitive_insights.analysis.techniques`` validates raw rows into this model
and drops the ones that fail.

Both models are frozen; the engine never mutates its inputs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from cognitive_insights.taxonomy.dimensions import CognitiveDimension, TechniqueFeedback


class AssessmentRecord(BaseModel):
    """A completed cognitive assessment.

    Attributes:
        id: Stable identifier assigned by the store.
        completed_at: When the assessment was completed.
        creativity_score .. time_awareness: Dimension scores (nominally 0–100).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    completed_at: datetime
    creativity_score: int
    problem_solving: int
    pattern_recognition: int
    focus_duration: int
    task_switching: int
    emotional_regulation: int
    organization: int
    time_awareness: int

    def value_for(self, dimension: CognitiveDimension) -> int:
        """Return this record's score for ``dimension``."""
        return getattr(self, dimension.value)


class InteractionRecord(BaseModel):
    """A user's interaction with a suggested technique.

    ``feedback`` must be present in the raw row but may be ``None`` (no
    feedback left); anything other than the two ``TechniqueFeedback`` values
    or ``None`` fails validation.
    """

    model_config = ConfigDict(frozen=True)

    technique_id: str
    technique_title: str
    feedback: Optional[TechniqueFeedback]
    created_at: datetime
