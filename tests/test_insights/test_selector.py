"""
Tests for cognitive_insights/insights/selector.py.

What we test
------------
build_scored_dimensions():
  - One ScoredDimension per dimension, catalog order.
  - Classification is mutually exclusive and follows the threshold.

select_strengths():
  - Only strengths; at most ``limit`` items.
  - Scores more than 5 apart -> higher score first.
  - Scores within 5 -> higher consistency first (missing pattern = 0).
  - Items carry the strength description.

select_weaknesses():
  - Only weaknesses; at most ``limit`` items.
  - Ascending by score, improving dimensions pushed back by 10.
  - Items carry the growth description.

Scenarios:
  - Single record, creativity 85 and all else 80 -> 3 strengths, 0 weaknesses.
  - Single record, everything 30 -> 3 weaknesses, 0 strengths.
"""

from __future__ import annotations

from cognitive_insights.analysis.patterns import DimensionPattern, analyze_historical_patterns
from cognitive_insights.insights.selector import (
    ScoredDimension,
    build_scored_dimensions,
    select_strengths,
    select_weaknesses,
)
from cognitive_insights.taxonomy.dimensions import DIMENSION_CATALOG, CognitiveDimension, Trend


def _sd(
    dimension: CognitiveDimension,
    score: float,
    consistency: float | None = None,
    trend: Trend = Trend.STABLE,
    threshold: float = 70.0,
) -> ScoredDimension:
    profile = DIMENSION_CATALOG[dimension]
    pattern = (
        DimensionPattern(average=score, trend=trend, consistency=consistency)
        if consistency is not None
        else None
    )
    return ScoredDimension(
        dimension=dimension,
        area=profile.area,
        value=int(score),
        pattern=pattern,
        priority_score=score,
        is_strength=score >= threshold,
        strength_description=profile.strength_description,
        growth_description=profile.growth_description,
    )


def _scored_for(records):
    patterns = analyze_historical_patterns(records)
    return build_scored_dimensions(records[0], patterns, records)


class TestBuildScoredDimensions:
    def test_one_per_dimension(self, make_assessment):
        scored = _scored_for([make_assessment(default=60)])
        assert [sd.dimension for sd in scored] == list(DIMENSION_CATALOG)

    def test_classification_is_exclusive(self, make_assessment):
        record = make_assessment(default=40, creativity_score=95, organization=75)
        for sd in _scored_for([record]):
            assert sd.is_strength != sd.is_weakness
            assert sd.is_strength == (sd.priority_score >= 70.0)

    def test_custom_threshold(self, make_assessment):
        records = [make_assessment(default=60)]
        patterns = analyze_historical_patterns(records)
        scored = build_scored_dimensions(records[0], patterns, records, threshold=50.0)
        assert all(sd.is_strength for sd in scored)


class TestSelectStrengths:
    def test_clear_score_gap_orders_by_score(self):
        scored = [
            _sd(CognitiveDimension.CREATIVITY, 75, consistency=99),
            _sd(CognitiveDimension.ORGANIZATION, 95, consistency=10),
        ]
        assert [i.area for i in select_strengths(scored)] == ["Organization", "Creativity"]

    def test_close_scores_order_by_consistency(self):
        scored = [
            _sd(CognitiveDimension.CREATIVITY, 90, consistency=50),
            _sd(CognitiveDimension.TIME_AWARENESS, 88, consistency=95),
        ]
        assert [i.area for i in select_strengths(scored)] == ["Time Awareness", "Creativity"]

    def test_missing_pattern_counts_as_zero_consistency(self):
        scored = [
            _sd(CognitiveDimension.CREATIVITY, 90),
            _sd(CognitiveDimension.FOCUS_DURATION, 87, consistency=1),
        ]
        assert select_strengths(scored)[0].area == "Focus Duration"

    def test_excludes_weaknesses_and_caps(self):
        scored = [_sd(d, 90, consistency=50) for d in DIMENSION_CATALOG]
        scored.append(_sd(CognitiveDimension.CREATIVITY, 20))
        result = select_strengths(scored)
        assert len(result) == 3

    def test_uses_strength_description(self):
        item = select_strengths([_sd(CognitiveDimension.ORGANIZATION, 90)])[0]
        assert item.description == DIMENSION_CATALOG[
            CognitiveDimension.ORGANIZATION
        ].strength_description

    def test_limit(self):
        scored = [_sd(d, 90) for d in DIMENSION_CATALOG]
        assert len(select_strengths(scored, limit=1)) == 1


class TestSelectWeaknesses:
    def test_ascending_by_score(self):
        scored = [
            _sd(CognitiveDimension.CREATIVITY, 60, consistency=50),
            _sd(CognitiveDimension.ORGANIZATION, 30, consistency=50),
            _sd(CognitiveDimension.FOCUS_DURATION, 45, consistency=50),
        ]
        assert [i.area for i in select_weaknesses(scored)] == [
            "Organization", "Focus Duration", "Creativity",
        ]

    def test_improving_weakness_pushed_back(self):
        scored = [
            _sd(CognitiveDimension.CREATIVITY, 40, consistency=50, trend=Trend.IMPROVING),
            _sd(CognitiveDimension.ORGANIZATION, 45, consistency=50),
        ]
        # creativity: 40 + 10 = 50 > 45
        assert [i.area for i in select_weaknesses(scored)] == ["Organization", "Creativity"]

    def test_excludes_strengths_and_caps(self):
        scored = [_sd(d, 20) for d in DIMENSION_CATALOG] + [
            _sd(CognitiveDimension.CREATIVITY, 99)
        ]
        result = select_weaknesses(scored)
        assert len(result) == 3
        assert all(
            i.description == DIMENSION_CATALOG[d].growth_description
            for i, d in zip(result, DIMENSION_CATALOG)
        )


class TestScenarios:
    def test_high_single_record_gives_three_strengths(self, make_assessment):
        scored = _scored_for([make_assessment(default=80, creativity_score=85)])
        strengths = select_strengths(scored)
        weaknesses = select_weaknesses(scored)
        assert len(strengths) == 3
        assert weaknesses == []
        # creativity 92.2 vs others 87.2: within the 5-point margin and every
        # consistency is 100, so catalog order is kept
        assert [s.area for s in strengths] == [
            "Creativity", "Problem Solving", "Pattern Recognition",
        ]

    def test_low_single_record_gives_three_weaknesses(self, make_assessment):
        scored = _scored_for([make_assessment(default=30)])
        assert select_strengths(scored) == []
        assert len(select_weaknesses(scored)) == 3

    def test_never_in_both_lists(self, history_of, make_assessment):
        records = [
            make_assessment("a0", default=72, creativity_score=20, organization=95),
            make_assessment("a1", default=60, days_ago=1),
            make_assessment("a2", default=90, days_ago=2),
            make_assessment("a3", default=40, days_ago=3),
        ]
        scored = _scored_for(records)
        strengths = {i.area for i in select_strengths(scored)}
        weaknesses = {i.area for i in select_weaknesses(scored)}
        assert not strengths & weaknesses
        assert len(strengths) <= 3 and len(weaknesses) <= 3
