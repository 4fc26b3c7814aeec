"""
Narrative composition: turns selected insights and history context into the
one-sentence summary shown to the user.

Phrases
-------
strengths : "your key strengths are A, B, C"
            fallback "you're developing strengths across multiple areas"
weaknesses: "focusing on A, B will help you progress further"
            fallback "you're performing well across all assessed areas"
trends    : " Your A and B are showing positive trends over time."
            (omitted when nothing is improving)
techniques: " Based on your interactions, you've found N techniques
            particularly helpful." (omitted when N == 0)

One of three templates is chosen with the supplied ``random.Random``; this is
the only nondeterministic step in the engine.

Time of day
-----------
``NarrativeContext.time_of_day`` is derived from the injected current time
but no template references it yet.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence

from cognitive_insights.analysis.patterns import DimensionPattern
from cognitive_insights.analysis.techniques import TechniqueStats, count_helpful_techniques
from cognitive_insights.models.insight import InsightItem
from cognitive_insights.taxonomy.dimensions import CognitiveDimension, Trend, area_name
from cognitive_insights.utils.time_utils import format_day_month_year, time_of_day

NO_STRENGTHS_PHRASE = "you're developing strengths across multiple areas"
NO_WEAKNESSES_PHRASE = "you're performing well across all assessed areas"

_TEMPLATES: tuple[str, ...] = (
    "Based on {count} {noun} and your latest results from {date}, {strengths}. "
    "{weaknesses}.{trends}{techniques}",
    "Your journey shows that {strengths}, with data from {count} {noun} "
    "including {date}. To continue growing, {weaknesses}.{trends}{techniques}",
    "Analysis of your {count} {noun} (latest: {date}) reveals {strengths}. "
    "For optimal progress, {weaknesses}.{trends}{techniques}",
)


@dataclass
class NarrativeContext:
    """Everything the narrative depends on.

    Attributes:
        strengths:        Selected strength items.
        weaknesses:       Selected weakness items.
        patterns:         Historical patterns per dimension.
        technique_stats:  Feedback counts per technique.
        latest_completed: Completion time of the newest assessment.
        now:              Current time (injected clock reading).
        assessment_count: Number of assessments analysed.
        time_of_day:      Derived from ``now``; not used by any template.
    """

    strengths:        Sequence[InsightItem]
    weaknesses:       Sequence[InsightItem]
    patterns:         Mapping[CognitiveDimension, DimensionPattern]
    technique_stats:  Mapping[str, TechniqueStats]
    latest_completed: datetime
    now:              datetime
    assessment_count: int
    time_of_day:      str = field(init=False)

    def __post_init__(self) -> None:
        self.time_of_day = time_of_day(self.now.hour)


def strengths_phrase(strengths: Sequence[InsightItem]) -> str:
    if not strengths:
        return NO_STRENGTHS_PHRASE
    return f"your key strengths are {', '.join(s.area for s in strengths)}"


def weaknesses_phrase(weaknesses: Sequence[InsightItem]) -> str:
    if not weaknesses:
        return NO_WEAKNESSES_PHRASE
    return (
        f"focusing on {', '.join(w.area for w in weaknesses)} "
        "will help you progress further"
    )


def improving_areas(
    patterns: Mapping[CognitiveDimension, DimensionPattern],
) -> list[str]:
    """Display names of dimensions whose trend is improving, in pattern order."""
    return [
        area_name(dimension)
        for dimension, pattern in patterns.items()
        if pattern.trend == Trend.IMPROVING
    ]


def trend_sentence(areas: Sequence[str]) -> str:
    if not areas:
        return ""
    verb = "are" if len(areas) > 1 else "is"
    return f" Your {' and '.join(areas)} {verb} showing positive trends over time."


def technique_sentence(helpful_count: int) -> str:
    if helpful_count <= 0:
        return ""
    noun = "techniques" if helpful_count > 1 else "technique"
    return (
        f" Based on your interactions, you've found {helpful_count} {noun} "
        "particularly helpful."
    )


def compose_narrative(
    context: NarrativeContext,
    rng:     Optional[random.Random] = None,
) -> str:
    """Render the summary sentence for ``context``.

    Args:
        context: Inputs gathered by the service.
        rng:     Random source for template choice. A fresh unseeded
                 ``random.Random`` is used when omitted.

    Returns:
        The fully interpolated narrative string.
    """
    rng = rng or random.Random()
    count = context.assessment_count
    template = rng.choice(_TEMPLATES)
    return template.format(
        count=count,
        noun="assessments" if count > 1 else "assessment",
        date=format_day_month_year(context.latest_completed),
        strengths=strengths_phrase(context.strengths),
        weaknesses=weaknesses_phrase(context.weaknesses),
        trends=trend_sentence(improving_areas(context.patterns)),
        techniques=technique_sentence(
            count_helpful_techniques(context.technique_stats)
        ),
    )
