"""
Repositories for assessment results and technique interactions.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Any, Mapping, Optional

from cognitive_insights.db.repositories.base import BaseRepository
from cognitive_insights.models.assessment import AssessmentRecord
from cognitive_insights.taxonomy.dimensions import DIMENSION_CATALOG

logger = logging.getLogger(__name__)

_DIMENSION_COLUMNS: list[str] = [d.value for d in DIMENSION_CATALOG]


class AssessmentRepository(BaseRepository):
    """Read/write access to ``assessment_results``."""

    def upsert(self, user_id: str, record: AssessmentRecord) -> None:
        """Insert an assessment, replacing any existing row with the same id.

        ``completed_at`` is stored as UTC ISO text so ``ORDER BY completed_at``
        sorts chronologically whatever offset the record arrived with.

        Args:
            user_id: Owner of the assessment.
            record: The ``AssessmentRecord`` to persist.
        """
        columns = ["id", "user_id", "completed_at", *_DIMENSION_COLUMNS]
        placeholders = ", ".join("?" for _ in columns)
        updates = ", ".join(f"{c} = excluded.{c}" for c in columns[1:])
        self.execute(
            f"""
            INSERT INTO assessment_results ({", ".join(columns)})
            VALUES ({placeholders})
            ON CONFLICT(id) DO UPDATE SET {updates};
            """,
            (
                record.id,
                user_id,
                record.completed_at.astimezone(timezone.utc).isoformat(),
                *(record.value_for(d) for d in DIMENSION_CATALOG),
            ),
        )

    def get_for_user(self, user_id: str) -> list[AssessmentRecord]:
        """Return every assessment for ``user_id``, newest first."""
        rows = self.fetchall(
            """
            SELECT * FROM assessment_results
            WHERE user_id = ?
            ORDER BY completed_at DESC;
            """,
            (user_id,),
        )
        return [_row_to_assessment(r) for r in rows]


class TechniqueInteractionRepository(BaseRepository):
    """Read/write access to ``technique_interactions``.

    Reads return raw dicts: validation is the analysis layer's job.
    """

    def insert(
        self,
        user_id: str,
        technique_id: Optional[str],
        technique_title: Optional[str],
        feedback: Optional[str],
        created_at: Optional[str] = None,
    ) -> int:
        """Insert one interaction row and return its ``interaction_id``."""
        if created_at is None:
            cursor = self.execute(
                """
                INSERT INTO technique_interactions
                    (user_id, technique_id, technique_title, feedback)
                VALUES (?, ?, ?, ?);
                """,
                (user_id, technique_id, technique_title, feedback),
            )
        else:
            cursor = self.execute(
                """
                INSERT INTO technique_interactions
                    (user_id, technique_id, technique_title, feedback, created_at)
                VALUES (?, ?, ?, ?, ?);
                """,
                (user_id, technique_id, technique_title, feedback, created_at),
            )
        return int(cursor.lastrowid)

    def insert_raw(self, user_id: str, row: Mapping[str, Any]) -> int:
        """Insert an interaction from an import-file object."""
        return self.insert(
            user_id=user_id,
            technique_id=row.get("technique_id"),
            technique_title=row.get("technique_title"),
            feedback=row.get("feedback"),
            created_at=row.get("created_at"),
        )

    def get_for_user(self, user_id: str) -> list[dict[str, Any]]:
        """Return raw interaction rows for ``user_id``, newest first."""
        return self.fetchall(
            """
            SELECT technique_id, technique_title, feedback, created_at
            FROM technique_interactions
            WHERE user_id = ?
            ORDER BY created_at DESC, interaction_id DESC;
            """,
            (user_id,),
        )


# ── Row mappers ────────────────────────────────────────────────────────────────

def _row_to_assessment(row: dict[str, Any]) -> AssessmentRecord:
    return AssessmentRecord(
        id=row["id"],
        completed_at=row["completed_at"],
        **{column: row[column] for column in _DIMENSION_COLUMNS},
    )
