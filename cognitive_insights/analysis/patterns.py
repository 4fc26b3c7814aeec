"""
Historical pattern analysis over a user's assessment records.

For every cognitive dimension three statistics are derived:

average (float):
    Arithmetic mean of the dimension across all records.

trend (Trend):
    ``stable`` when fewer than ``MIN_RECORDS_FOR_TREND`` records exist.
    Otherwise the sequence is split at ``n // 2`` *in the order supplied*
    (callers pass newest-first, so the first half is the more recent one).
    If the second-half mean exceeds the first-half mean by more than
    ``TREND_MARGIN`` → ``improving``; if it falls short by more than
    ``TREND_MARGIN`` → ``declining``; otherwise ``stable``.

consistency (float):
    ``max(0, 100 - population_std)``. Higher means more stable. Not clamped
    above 100.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Sequence

from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.taxonomy.dimensions import DIMENSION_CATALOG, CognitiveDimension, Trend

MIN_RECORDS_FOR_TREND = 4
TREND_MARGIN = 5.0


@dataclass(frozen=True)
class DimensionPattern:
    """Historical statistics for one dimension.

    Attributes:
        average:     Mean value across all records.
        trend:       Direction comparing the two halves of the history.
        consistency: ``max(0, 100 - population std)``.
    """

    average:     float
    trend:       Trend
    consistency: float


def analyze_historical_patterns(
    assessments: Sequence[AssessmentRecord],
) -> dict[CognitiveDimension, DimensionPattern]:
    """Compute a ``DimensionPattern`` for every dimension.

    Args:
        assessments: Records in caller order (newest first).

    Returns:
        Mapping dimension → pattern in catalog order; ``{}`` for empty input.
    """
    if not assessments:
        return {}

    patterns: dict[CognitiveDimension, DimensionPattern] = {}
    for dimension in DIMENSION_CATALOG:
        values = [a.value_for(dimension) for a in assessments]
        average = statistics.fmean(values)
        consistency = max(0.0, 100.0 - statistics.pstdev(values))
        patterns[dimension] = DimensionPattern(
            average=average,
            trend=_detect_trend(values),
            consistency=consistency,
        )
    return patterns


def _detect_trend(values: list[int]) -> Trend:
    if len(values) < MIN_RECORDS_FOR_TREND:
        return Trend.STABLE

    mid = len(values) // 2
    first_avg = statistics.fmean(values[:mid])
    second_avg = statistics.fmean(values[mid:])

    if second_avg > first_avg + TREND_MARGIN:
        return Trend.IMPROVING
    if second_avg < first_avg - TREND_MARGIN:
        return Trend.DECLINING
    return Trend.STABLE
