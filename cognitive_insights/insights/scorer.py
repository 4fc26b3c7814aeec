"""
Priority scoring: combines a dimension's latest value with its historical
pattern and recent movement into a single bounded score.

Score formula (applied in order, result clamped to 0–100)
----------------------------------------------------------
    score = latest raw value

    trend adjustment (pattern present):
        improving → +15
        declining → -10

    consistency adjustment (pattern present):
        consistency > 80 → +8
        consistency < 40 → -5

    historical blend (pattern present and average non-zero):
        w     = min(assessment_count / 10, 0.3)
        score = score * (1 - w) + average * w

    recency bias (more than one assessment):
        recent = up to the 3 newest values of this dimension
        score += (recent[0] - recent[-1]) * 0.2

Classification
--------------
A dimension is a strength iff its final score >= STRENGTH_THRESHOLD (70),
otherwise a weakness. Exactly one of the two always holds.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from cognitive_insights.analysis.patterns import DimensionPattern
from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.taxonomy.dimensions import CognitiveDimension, Trend

STRENGTH_THRESHOLD = 70.0

# Trend → score adjustment
_TREND_ADJUSTMENT: dict[Trend, float] = {
    Trend.IMPROVING: 15.0,
    Trend.DECLINING: -10.0,
    Trend.STABLE:     0.0,
}

_HIGH_CONSISTENCY = 80.0
_LOW_CONSISTENCY = 40.0
_MAX_HISTORICAL_WEIGHT = 0.3
_RECENCY_WINDOW = 3
_RECENCY_FACTOR = 0.2


def compute_priority_score(
    dimension:   CognitiveDimension,
    raw_value:   float,
    pattern:     Optional[DimensionPattern],
    patterns:    Mapping[CognitiveDimension, DimensionPattern],
    assessments: Sequence[AssessmentRecord],
) -> float:
    """Compute the priority score for one dimension.

    Args:
        dimension:   Dimension being scored (used to read recent values).
        raw_value:   The dimension's value on the latest assessment.
        pattern:     The dimension's historical pattern, or ``None``.
        patterns:    Full pattern mapping. Only ``pattern`` is consulted; the
                     mapping is accepted so every scorer shares one signature.
        assessments: Full history, newest first.

    Returns:
        Score clamped to ``[0, 100]``.
    """
    score = float(raw_value)

    if pattern is not None:
        score += _TREND_ADJUSTMENT[pattern.trend]

        if pattern.consistency > _HIGH_CONSISTENCY:
            score += 8.0
        elif pattern.consistency < _LOW_CONSISTENCY:
            score -= 5.0

        if pattern.average:
            weight = min(len(assessments) / 10.0, _MAX_HISTORICAL_WEIGHT)
            score = score * (1.0 - weight) + pattern.average * weight

    if len(assessments) > 1:
        recent = [a.value_for(dimension) for a in assessments[:_RECENCY_WINDOW]]
        if len(recent) >= 2:
            score += (recent[0] - recent[-1]) * _RECENCY_FACTOR

    return _clamp(score, 0.0, 100.0)


def is_strength(score: float, threshold: float = STRENGTH_THRESHOLD) -> bool:
    """True when ``score`` meets the strength threshold."""
    return score >= threshold


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
