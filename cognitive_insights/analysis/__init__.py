"""
History analysis: per-dimension patterns and per-technique feedback counts.

Modules
-------
patterns   : DimensionPattern dataclass + analyze_historical_patterns()
             (pure function over assessment history).
techniques : TechniqueStats dataclass + parse_interactions()
             + analyze_technique_patterns() + count_helpful_techniques().
"""
