"""
Repository for generated insight history (``user_insight_history``).

Strength and weakness lists are stored as JSON text. Reads return the row as
a dict with those columns still encoded: decoding and validation happen in
``cognitive_insights.insights.service.decode_insight_row``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence
from uuid import uuid4

from cognitive_insights.db.repositories.base import BaseRepository
from cognitive_insights.models.insight import InsightItem, SavedInsight
from cognitive_insights.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class InsightHistoryRepository(BaseRepository):
    """Read/write access to ``user_insight_history``."""

    def insert(
        self,
        user_id: str,
        general_insight: str,
        strengths: Sequence[InsightItem],
        weaknesses: Sequence[InsightItem],
        assessment_id: str | None,
    ) -> SavedInsight:
        """Persist one generated insight.

        Returns:
            ``SavedInsight`` with a new UUID4 id and the UTC creation time.
        """
        saved = SavedInsight(id=str(uuid4()), created_at=utcnow())
        self.execute(
            """
            INSERT INTO user_insight_history (
                id, user_id, general_insight, strengths, weaknesses,
                assessment_id, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (
                saved.id,
                user_id,
                general_insight,
                json.dumps([s.model_dump() for s in strengths]),
                json.dumps([w.model_dump() for w in weaknesses]),
                assessment_id,
                saved.created_at.isoformat(),
            ),
        )
        logger.debug("Saved insight %s for user %s", saved.id, user_id)
        return saved

    def get_recent(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """Return up to ``limit`` stored rows for ``user_id``, newest first."""
        return self.fetchall(
            """
            SELECT * FROM user_insight_history
            WHERE user_id = ?
            ORDER BY created_at DESC
            LIMIT ?;
            """,
            (user_id, limit),
        )
