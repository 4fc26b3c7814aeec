"""
Technique feedback aggregation.

Interaction rows arrive as raw mappings from the store. ``parse_interactions``
validates each into an ``InteractionRecord`` and silently drops rows with a
missing technique id or title, a non-string id, a feedback value outside
``helpful`` / ``not-helpful`` / ``None``, or an unparseable timestamp.

``analyze_technique_patterns`` then counts, per technique id:
  - total_interactions: every record
  - helpful:            feedback == helpful
  - not_helpful:        feedback == not-helpful
Records with no feedback count toward the total only. Accumulation is
commutative, so record order never affects the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from cognitive_insights.models.assessment import InteractionRecord
from cognitive_insights.taxonomy.dimensions import TechniqueFeedback

logger = logging.getLogger(__name__)


@dataclass
class TechniqueStats:
    """Feedback counts for one technique."""

    helpful:            int = 0
    not_helpful:        int = 0
    total_interactions: int = 0

    @property
    def is_helpful(self) -> bool:
        """True when positive feedback outweighs negative and exists at all."""
        return self.helpful > self.not_helpful and self.helpful > 0


def parse_interactions(rows: Iterable[Mapping[str, Any]]) -> list[InteractionRecord]:
    """Validate raw interaction rows, dropping malformed ones.

    Args:
        rows: Raw rows (dict-like) as returned by the store.

    Returns:
        Valid ``InteractionRecord`` objects in input order.
    """
    valid: list[InteractionRecord] = []
    dropped = 0
    for row in rows:
        if not isinstance(row, Mapping):
            dropped += 1
            continue
        try:
            valid.append(InteractionRecord.model_validate(dict(row)))
        except ValidationError:
            dropped += 1
    if dropped:
        logger.debug("Dropped %d malformed technique interaction(s).", dropped)
    return valid


def analyze_technique_patterns(
    interactions: Iterable[InteractionRecord],
) -> dict[str, TechniqueStats]:
    """Aggregate feedback counts per technique id.

    Args:
        interactions: Already-validated interaction records.

    Returns:
        Mapping technique_id → ``TechniqueStats``.
    """
    stats: dict[str, TechniqueStats] = {}
    for interaction in interactions:
        entry = stats.setdefault(interaction.technique_id, TechniqueStats())
        entry.total_interactions += 1
        if interaction.feedback == TechniqueFeedback.HELPFUL:
            entry.helpful += 1
        elif interaction.feedback == TechniqueFeedback.NOT_HELPFUL:
            entry.not_helpful += 1
    return stats


def count_helpful_techniques(stats: Mapping[str, TechniqueStats]) -> int:
    """Number of techniques the user found more helpful than not."""
    return sum(1 for s in stats.values() if s.is_helpful)
