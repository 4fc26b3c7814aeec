"""
Insight service: runs the full analysis for a user and applies the
fallback policy around the persistence collaborator.

get_strengths_and_weaknesses(user_id)
-------------------------------------
  1. Fetch assessments (mandatory). None → "complete an assessment" result,
     no analysis is run.
  2. Fetch interactions (optional). Failure → logged, analysis proceeds
     without technique context.
  3. analyze_historical_patterns / parse_interactions +
     analyze_technique_patterns.
  4. build_scored_dimensions → select_strengths / select_weaknesses.
  5. compose_narrative with the injected rng and clock.
  6. save_insight (optional). Failure → logged, result returned without
     id / created_at.
  Any failure in steps 1 and 3–5 → TROUBLE_MESSAGE fallback result.

get_insight_history(user_id)
----------------------------
  Fetch stored rows and decode each with ``decode_insight_row()``. Any
  failure → empty list.
"""

from __future__ import annotations

import json
import logging
import random
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from cognitive_insights.analysis.patterns import analyze_historical_patterns
from cognitive_insights.analysis.techniques import (
    analyze_technique_patterns,
    parse_interactions,
)
from cognitive_insights.config import InsightConfig
from cognitive_insights.insights.narrative import NarrativeContext, compose_narrative
from cognitive_insights.insights.selector import (
    build_scored_dimensions,
    select_strengths,
    select_weaknesses,
)
from cognitive_insights.insights.store import InsightStore
from cognitive_insights.models.insight import (
    MAX_INSIGHT_ITEMS,
    InsightItem,
    UserInsightsResult,
)
from cognitive_insights.utils.time_utils import Clock, local_now

logger = logging.getLogger(__name__)

NO_ASSESSMENTS_MESSAGE = "Complete an assessment to see personalized insights."
TROUBLE_MESSAGE = "We're having trouble analyzing your data. Please try again later."


class InsightService:
    """Computes and records strengths/weaknesses insights for users.

    Attributes:
        store:  Persistence collaborator.
        config: Thresholds, caps and history limit.
        rng:    Random source for narrative template choice.
        clock:  Returns the current local time (defaults to ``local_now``).
    """

    def __init__(
        self,
        store: InsightStore,
        config: Optional[InsightConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.config = config or InsightConfig()
        self.rng = rng or random.Random(self.config.narrative_seed)
        self.clock = clock or local_now

    def get_strengths_and_weaknesses(self, user_id: str) -> UserInsightsResult:
        """Analyse a user's history and return ranked insights plus a narrative.

        Never raises: collaborator and analysis failures map to the fallback
        result described in the module docstring.
        """
        try:
            assessments = list(self.store.fetch_assessments(user_id))
            if not assessments:
                return UserInsightsResult(general_insight=NO_ASSESSMENTS_MESSAGE)

            try:
                raw_interactions = list(self.store.fetch_interactions(user_id))
            except Exception as exc:
                logger.warning(
                    "Could not fetch technique interactions for user=%s: %s",
                    user_id, exc,
                )
                raw_interactions = []

            latest = assessments[0]
            patterns = analyze_historical_patterns(assessments)
            technique_stats = analyze_technique_patterns(
                parse_interactions(raw_interactions)
            )

            scored = build_scored_dimensions(
                latest, patterns, assessments, threshold=self.config.strength_threshold
            )
            strengths = select_strengths(scored, limit=self.config.max_strengths)
            weaknesses = select_weaknesses(scored, limit=self.config.max_weaknesses)

            general_insight = compose_narrative(
                NarrativeContext(
                    strengths=strengths,
                    weaknesses=weaknesses,
                    patterns=patterns,
                    technique_stats=technique_stats,
                    latest_completed=latest.completed_at,
                    now=self.clock(),
                    assessment_count=len(assessments),
                ),
                rng=self.rng,
            )
            logger.info(
                "Insights for user=%s | assessments=%d strengths=%d weaknesses=%d",
                user_id, len(assessments), len(strengths), len(weaknesses),
            )

            result = UserInsightsResult(
                strengths=strengths,
                weaknesses=weaknesses,
                general_insight=general_insight,
                assessment_id=latest.id,
            )
            return self._save(user_id, result)

        except Exception:
            logger.exception("Insight analysis failed for user=%s", user_id)
            return UserInsightsResult(general_insight=TROUBLE_MESSAGE)

    def get_insight_history(self, user_id: str) -> list[UserInsightsResult]:
        """Return up to ``history_limit`` stored insights, newest first.

        Returns an empty list if the store fails. Rows that cannot be decoded
        are logged and skipped.
        """
        try:
            rows = list(
                self.store.fetch_insight_history(user_id, limit=self.config.history_limit)
            )
        except Exception:
            logger.exception("Could not load insight history for user=%s", user_id)
            return []

        history: list[UserInsightsResult] = []
        for row in rows:
            try:
                history.append(decode_insight_row(row))
            except Exception as exc:
                logger.warning("Skipping unreadable insight row: %s", exc)
        return history

    def _save(self, user_id: str, result: UserInsightsResult) -> UserInsightsResult:
        try:
            saved = self.store.save_insight(
                user_id=user_id,
                general_insight=result.general_insight,
                strengths=result.strengths,
                weaknesses=result.weaknesses,
                assessment_id=result.assessment_id,
            )
        except Exception as exc:
            logger.warning("Could not save insight history for user=%s: %s", user_id, exc)
            return result
        return result.model_copy(update={"id": saved.id, "created_at": saved.created_at})


# ── Stored row decoding ────────────────────────────────────────────────────────

def decode_insight_row(row: Mapping[str, Any]) -> UserInsightsResult:
    """Rebuild a ``UserInsightsResult`` from a stored history row.

    ``strengths`` / ``weaknesses`` may be JSON text or already-decoded lists.
    Entries that are not ``{"area": str, "description": str}`` objects are
    dropped. Rows written before the result model enforced its limits may
    hold more than 3 items or repeat a strength area among the weaknesses;
    those extras are dropped (logged at debug) so the row still loads.

    Raises:
        pydantic.ValidationError: If the row's scalar fields are invalid
            (e.g. missing ``general_insight``).
    """
    strengths = _decode_items(row.get("strengths"))
    weaknesses = _decode_items(row.get("weaknesses"))
    strength_areas = {s.area for s in strengths}
    kept = [w for w in weaknesses if w.area not in strength_areas]
    if len(kept) < len(weaknesses):
        logger.debug(
            "Insight row %s: dropped %d weakness(es) that repeat a strength area.",
            row.get("id"), len(weaknesses) - len(kept),
        )
    weaknesses = kept

    return UserInsightsResult(
        id=row.get("id"),
        general_insight=row.get("general_insight"),
        strengths=strengths,
        weaknesses=weaknesses,
        created_at=row.get("created_at"),
        assessment_id=row.get("assessment_id"),
    )


def _decode_items(raw: Any) -> list[InsightItem]:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Stored insight items are not valid JSON; ignoring.")
            return []
    if not isinstance(raw, list):
        return []

    items: list[InsightItem] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        try:
            items.append(
                InsightItem.model_validate(
                    {"area": entry.get("area"), "description": entry.get("description")}
                )
            )
        except ValidationError:
            continue
    if len(items) > MAX_INSIGHT_ITEMS:
        logger.debug(
            "Stored insight list has %d items; keeping the first %d.",
            len(items), MAX_INSIGHT_ITEMS,
        )
    return items[:MAX_INSIGHT_ITEMS]
