"""
Persistence collaborator for the insight service.

``InsightStore`` is the contract the service depends on. Any object with these
four methods works; ``SqliteInsightStore`` is the bundled implementation.

Contract
--------
fetch_assessments(user_id)       -> assessments, newest first
fetch_interactions(user_id)      -> raw interaction rows, newest first
save_insight(...)                -> SavedInsight(id, created_at)
fetch_insight_history(user_id, limit) -> raw stored insight rows, newest first

Implementations signal failure by raising. The service decides which failures
abort the analysis and which only degrade it.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Mapping, Protocol, Sequence

from cognitive_insights.config import DatabaseConfig
from cognitive_insights.db.connection import connection_for
from cognitive_insights.db.repositories.assessment_repo import (
    AssessmentRepository,
    TechniqueInteractionRepository,
)
from cognitive_insights.db.repositories.insight_repo import InsightHistoryRepository
from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.models.insight import InsightItem, SavedInsight

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """A store operation failed."""


class InsightStore(Protocol):
    def fetch_assessments(self, user_id: str) -> Sequence[AssessmentRecord]: ...

    def fetch_interactions(self, user_id: str) -> Sequence[Mapping[str, Any]]: ...

    def save_insight(
        self,
        user_id: str,
        general_insight: str,
        strengths: Sequence[InsightItem],
        weaknesses: Sequence[InsightItem],
        assessment_id: str | None,
    ) -> SavedInsight: ...

    def fetch_insight_history(
        self, user_id: str, limit: int = 10
    ) -> Sequence[Mapping[str, Any]]: ...


class SqliteInsightStore:
    """``InsightStore`` backed by the local SQLite database.

    Each call opens its own connection, so a store instance holds no state
    beyond its configuration. ``sqlite3.Error`` is re-raised as ``StoreError``.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config

    def fetch_assessments(self, user_id: str) -> list[AssessmentRecord]:
        try:
            with connection_for(self.config) as conn:
                return AssessmentRepository(conn).get_for_user(user_id)
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to fetch assessments for {user_id}: {exc}") from exc

    def fetch_interactions(self, user_id: str) -> list[dict[str, Any]]:
        try:
            with connection_for(self.config) as conn:
                return TechniqueInteractionRepository(conn).get_for_user(user_id)
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to fetch interactions for {user_id}: {exc}") from exc

    def save_insight(
        self,
        user_id: str,
        general_insight: str,
        strengths: Sequence[InsightItem],
        weaknesses: Sequence[InsightItem],
        assessment_id: str | None,
    ) -> SavedInsight:
        try:
            with connection_for(self.config) as conn:
                return InsightHistoryRepository(conn).insert(
                    user_id=user_id,
                    general_insight=general_insight,
                    strengths=strengths,
                    weaknesses=weaknesses,
                    assessment_id=assessment_id,
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to save insight for {user_id}: {exc}") from exc

    def fetch_insight_history(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        try:
            with connection_for(self.config) as conn:
                return InsightHistoryRepository(conn).get_recent(user_id, limit=limit)
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to fetch insight history for {user_id}: {exc}") from exc
