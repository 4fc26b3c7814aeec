"""
Insight engine: converts assessment history into ranked strengths and
weaknesses with a narrative summary.

Modules
-------
scorer    : compute_priority_score() + is_strength(): pure functions.
selector  : ScoredDimension dataclass + build_scored_dimensions()
            + select_strengths() + select_weaknesses().
narrative : NarrativeContext + compose_narrative(): template rendering
            with an injectable random source.
store     : InsightStore protocol + SqliteInsightStore adapter.
service   : InsightService: orchestration and the fallback policy.
"""
