"""
Cognitive dimension taxonomy and the static description catalog.

Three enums describe the vocabulary shared by every analysis module:
  - ``CognitiveDimension``: the 8 measured fields on an assessment record.
  - ``Trend``: direction of a dimension over history.
  - ``TechniqueFeedback``: user feedback on a suggested technique.

``DIMENSION_CATALOG`` is the table of display names and canned descriptions.
Its iteration order is the canonical dimension order: analyzers, scorers and
the narrative all walk dimensions in this order.

This module has NO imports from any other ``cognitive_insights`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CognitiveDimension(StrEnum):
    """One of the 8 cognitive fields tracked per assessment.

    Values equal the assessment record field names.
    """

    CREATIVITY = "creativity_score"
    PROBLEM_SOLVING = "problem_solving"
    PATTERN_RECOGNITION = "pattern_recognition"
    FOCUS_DURATION = "focus_duration"
    TASK_SWITCHING = "task_switching"
    EMOTIONAL_REGULATION = "emotional_regulation"
    ORGANIZATION = "organization"
    TIME_AWARENESS = "time_awareness"


class Trend(StrEnum):
    """Qualitative direction derived from comparing two halves of history."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class TechniqueFeedback(StrEnum):
    """Explicit feedback a user left on a technique. Absent feedback is ``None``."""

    HELPFUL = "helpful"
    NOT_HELPFUL = "not-helpful"


@dataclass(frozen=True)
class DimensionProfile:
    """Display name and canned descriptions for one dimension."""

    area: str
    strength_description: str
    growth_description: str


DIMENSION_CATALOG: dict[CognitiveDimension, DimensionProfile] = {
    CognitiveDimension.CREATIVITY: DimensionProfile(
        area="Creativity",
        strength_description=(
            "You excel at generating original ideas and thinking outside the box."
        ),
        growth_description=(
            "Focus on developing creative thinking and innovative problem-solving approaches."
        ),
    ),
    CognitiveDimension.PROBLEM_SOLVING: DimensionProfile(
        area="Problem Solving",
        strength_description=(
            "You demonstrate strong abilities in finding solutions to complex challenges."
        ),
        growth_description=(
            "Work on developing systematic approaches to problem-solving and analytical thinking."
        ),
    ),
    CognitiveDimension.PATTERN_RECOGNITION: DimensionProfile(
        area="Pattern Recognition",
        strength_description=(
            "You can easily identify connections and patterns where others might not see them."
        ),
        growth_description=(
            "Practice identifying patterns and connections in information and experiences."
        ),
    ),
    CognitiveDimension.FOCUS_DURATION: DimensionProfile(
        area="Focus Duration",
        strength_description="You maintain excellent concentration for extended periods.",
        growth_description="Improve your ability to maintain concentration for extended periods.",
    ),
    CognitiveDimension.TASK_SWITCHING: DimensionProfile(
        area="Task Switching",
        strength_description=(
            "You transition smoothly between different activities while maintaining focus."
        ),
        growth_description=(
            "Work on transitioning between different activities smoothly without losing focus."
        ),
    ),
    CognitiveDimension.EMOTIONAL_REGULATION: DimensionProfile(
        area="Emotional Regulation",
        strength_description=(
            "You manage emotional responses effectively in challenging situations."
        ),
        growth_description=(
            "Develop strategies to better manage emotional responses to stressors."
        ),
    ),
    CognitiveDimension.ORGANIZATION: DimensionProfile(
        area="Organization",
        strength_description=(
            "You maintain excellent organization in tasks, environment, and information."
        ),
        growth_description=(
            "Create systems to better organize your tasks, environment, and information."
        ),
    ),
    CognitiveDimension.TIME_AWARENESS: DimensionProfile(
        area="Time Awareness",
        strength_description=(
            "You have strong skills in estimating and managing time effectively."
        ),
        growth_description=(
            "Build skills to better estimate and manage time for various activities."
        ),
    ),
}


def area_name(dimension: CognitiveDimension) -> str:
    """Return the display name for a dimension, e.g. ``"Focus Duration"``."""
    return DIMENSION_CATALOG[dimension].area
