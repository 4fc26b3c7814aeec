"""
Shared SQL helpers for the insight-store repositories.

Repositories wrap a caller-owned ``sqlite3.Connection`` (normally opened by
``get_connection()``), keep all SQL explicit, and hand back pydantic models
or plain dicts, never ``sqlite3.Row`` objects.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...] | dict[str, Any]


class BaseRepository:
    """Base class holding the connection and query helpers.

    Attributes:
        conn: The active ``sqlite3.Connection``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        logger.debug("SQL: %s | params: %s", " ".join(sql.split()), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[dict[str, Any]]:
        """Run a query and return the first row as a dict, or ``None``."""
        row = self.execute(sql, params).fetchone()
        return dict(row) if row is not None else None

    def fetchall(self, sql: str, params: Params = ()) -> list[dict[str, Any]]:
        """Run a query and return every row as a dict."""
        return [dict(r) for r in self.execute(sql, params).fetchall()]
