"""
Insight report writers.

Each function writes to disk and returns the written ``Path``.

  write_insight_json(): one result as pretty-printed JSON
  write_history_csv(): insight history, one row per stored result, with
                          strengths / weaknesses flattened to ``"; "``-joined
                          area names so the file opens directly in Excel
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from cognitive_insights.models.insight import UserInsightsResult

logger = logging.getLogger(__name__)

HISTORY_CSV_FIELDS = [
    "id", "created_at", "assessment_id", "strengths", "weaknesses", "general_insight",
]


def write_insight_json(
    result: UserInsightsResult,
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write one result to ``insights_{user_id}_{date}.json`` in ``output_dir``.

    Args:
        result:     The result to serialise.
        output_dir: Destination directory (created if missing).
        user_id:    Used in the filename and stored in the payload.
        run_date:   Filename date label. Defaults to today.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"insights_{user_id}_{run_date}.json"

    payload = {"user_id": user_id, **result.model_dump(mode="json")}
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Insight JSON written: %s", json_path)
    return json_path


def write_history_csv(history: Sequence[UserInsightsResult], path: Path) -> Path:
    """Write insight history as a flat CSV file at ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_CSV_FIELDS)
        writer.writeheader()
        for item in history:
            writer.writerow(
                {
                    "id":              item.id or "",
                    "created_at":      item.created_at.isoformat() if item.created_at else "",
                    "assessment_id":   item.assessment_id or "",
                    "strengths":       "; ".join(s.area for s in item.strengths),
                    "weaknesses":      "; ".join(w.area for w in item.weaknesses),
                    "general_insight": item.general_insight,
                }
            )
    logger.info("Insight history CSV written: %s (%d rows)", path, len(history))
    return path
