"""
Records import file loader.

File format (JSON object)::

    {
      "user_id": "user-123",
      "assessments": [
        {"id": "a1", "completed_at": "2024-03-05T10:00:00Z",
         "creativity_score": 72, "problem_solving": 65, ...}
      ],
      "interactions": [
        {"technique_id": "t1", "technique_title": "Pomodoro",
         "feedback": "helpful", "created_at": "2024-03-06T09:00:00Z"}
      ]
    }

Validation rules
----------------
- Top level must be an object with an ``assessments`` array.
- Every assessment must validate as an ``AssessmentRecord``; failures are
  collected (index + message) rather than raised one at a time.
- Duplicate assessment ids are rejected.
- Interactions are imported as-is. The store keeps legacy rows and the
  analysis layer filters malformed ones at read time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from cognitive_insights.models.assessment import AssessmentRecord

logger = logging.getLogger(__name__)


@dataclass
class RecordsFile:
    """Parsed contents of an import file.

    Attributes:
        user_id:      Owner declared in the file, or ``None``.
        assessments:  Records that validated.
        interactions: Raw interaction objects.
        errors:       ``(index, message)`` for each rejected assessment.
    """

    user_id:      Optional[str]
    assessments:  list[AssessmentRecord] = field(default_factory=list)
    interactions: list[dict[str, Any]] = field(default_factory=list)
    errors:       list[tuple[int, str]] = field(default_factory=list)


def load_records_file(path: Path) -> RecordsFile:
    """Parse and validate an import file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the JSON is unreadable or has the wrong top-level shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError("Records file must contain a JSON object.")
    raw_assessments = raw.get("assessments", [])
    raw_interactions = raw.get("interactions", [])
    if not isinstance(raw_assessments, list) or not isinstance(raw_interactions, list):
        raise ValueError("'assessments' and 'interactions' must be arrays.")

    parsed = RecordsFile(user_id=raw.get("user_id"))
    seen_ids: set[str] = set()
    for i, rec in enumerate(raw_assessments):
        try:
            record = AssessmentRecord.model_validate(rec)
        except ValidationError as exc:
            parsed.errors.append((i, str(exc)))
            continue
        if record.id in seen_ids:
            parsed.errors.append((i, f"Duplicate assessment id '{record.id}'."))
            continue
        seen_ids.add(record.id)
        parsed.assessments.append(record)

    parsed.interactions = [r for r in raw_interactions if isinstance(r, dict)]
    logger.debug(
        "Loaded %s: %d assessment(s), %d interaction(s), %d error(s)",
        path, len(parsed.assessments), len(parsed.interactions), len(parsed.errors),
    )
    return parsed
