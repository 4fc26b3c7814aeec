"""
Insight selection: scores every dimension of the latest assessment, splits
them into strengths and weaknesses, and picks the top entries of each.

Usage flow
----------
1. build_scored_dimensions(latest, patterns, assessments)
   -> list[ScoredDimension]  (one per dimension, catalog order)

2. select_strengths(scored, limit=3)
   -> list[InsightItem]  (strengths, strongest and most consistent first)

3. select_weaknesses(scored, limit=3)
   -> list[InsightItem]  (weaknesses, lowest non-improving first)

Ranking rules
-------------
Strengths: pairwise comparison. Scores more than 5 apart order by score
descending; closer scores order by consistency descending (no pattern → 0).

Weaknesses: ascending by ``priority_score + 10`` for improving dimensions,
``priority_score`` otherwise. Improving weaknesses sink down the list so the
ones that are not yet improving surface first.

Both sorts are stable, so dimensions that compare equal keep catalog order.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from cognitive_insights.analysis.patterns import DimensionPattern
from cognitive_insights.insights.scorer import (
    STRENGTH_THRESHOLD,
    compute_priority_score,
    is_strength,
)
from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.models.insight import MAX_INSIGHT_ITEMS, InsightItem
from cognitive_insights.taxonomy.dimensions import (
    DIMENSION_CATALOG,
    CognitiveDimension,
    Trend,
)

_TIE_MARGIN = 5.0
_IMPROVING_OFFSET = 10.0


@dataclass
class ScoredDimension:
    """A cognitive dimension with its score and classification.

    Attributes:
        dimension:            Which dimension this is.
        area:                 Display name, e.g. ``"Task Switching"``.
        value:                Latest raw value.
        pattern:              Historical pattern, or ``None`` without history.
        priority_score:       Blended score in ``[0, 100]``.
        is_strength:          ``priority_score >= threshold``.
        strength_description: Canned text used when selected as a strength.
        growth_description:   Canned text used when selected as a weakness.
    """

    dimension:            CognitiveDimension
    area:                 str
    value:                int
    pattern:              Optional[DimensionPattern]
    priority_score:       float
    is_strength:          bool
    strength_description: str
    growth_description:   str

    @property
    def is_weakness(self) -> bool:
        return not self.is_strength

    @property
    def consistency(self) -> float:
        return self.pattern.consistency if self.pattern is not None else 0.0

    @property
    def is_improving(self) -> bool:
        return self.pattern is not None and self.pattern.trend == Trend.IMPROVING


def build_scored_dimensions(
    latest:      AssessmentRecord,
    patterns:    Mapping[CognitiveDimension, DimensionPattern],
    assessments: Sequence[AssessmentRecord],
    threshold:   float = STRENGTH_THRESHOLD,
) -> list[ScoredDimension]:
    """Score and classify every dimension of ``latest``.

    Args:
        latest:      The most recent assessment (values being scored).
        patterns:    Output of ``analyze_historical_patterns()``.
        assessments: Full history, newest first.
        threshold:   Strength cutoff.

    Returns:
        One ``ScoredDimension`` per dimension in catalog order.
    """
    scored: list[ScoredDimension] = []
    for dimension, profile in DIMENSION_CATALOG.items():
        value = latest.value_for(dimension)
        pattern = patterns.get(dimension)
        score = compute_priority_score(
            dimension=dimension,
            raw_value=value,
            pattern=pattern,
            patterns=patterns,
            assessments=assessments,
        )
        scored.append(
            ScoredDimension(
                dimension=dimension,
                area=profile.area,
                value=value,
                pattern=pattern,
                priority_score=score,
                is_strength=is_strength(score, threshold),
                strength_description=profile.strength_description,
                growth_description=profile.growth_description,
            )
        )
    return scored


def select_strengths(
    scored: Sequence[ScoredDimension],
    limit:  int = MAX_INSIGHT_ITEMS,
) -> list[InsightItem]:
    """Rank strengths and return the top ``limit`` as insight items."""
    strengths = [sd for sd in scored if sd.is_strength]
    ranked = sorted(strengths, key=functools.cmp_to_key(_compare_strengths))
    return [
        InsightItem(area=sd.area, description=sd.strength_description)
        for sd in ranked[:limit]
    ]


def select_weaknesses(
    scored: Sequence[ScoredDimension],
    limit:  int = MAX_INSIGHT_ITEMS,
) -> list[InsightItem]:
    """Rank weaknesses and return the first ``limit`` as insight items."""
    weaknesses = [sd for sd in scored if sd.is_weakness]
    ranked = sorted(weaknesses, key=_actionability)
    return [
        InsightItem(area=sd.area, description=sd.growth_description)
        for sd in ranked[:limit]
    ]


def _compare_strengths(a: ScoredDimension, b: ScoredDimension) -> float:
    if abs(a.priority_score - b.priority_score) > _TIE_MARGIN:
        return b.priority_score - a.priority_score
    return b.consistency - a.consistency


def _actionability(sd: ScoredDimension) -> float:
    return sd.priority_score + (_IMPROVING_OFFSET if sd.is_improving else 0.0)
