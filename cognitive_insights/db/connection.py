"""
SQLite connections for the insight store.

``get_connection()`` opens a database, applies the session PRAGMAs and yields
it inside the connection's own transaction context: the block commits on a
clean exit, rolls back if it raises, and the connection is always closed.

``connection_for()`` is the usual entry point, taking its settings from a
``DatabaseConfig``::

    with connection_for(config.database) as conn:
        apply_schema(conn)
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from cognitive_insights.config import DatabaseConfig

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


def _session_pragmas(wal_mode: bool, busy_timeout_ms: int) -> list[str]:
    pragmas = ["foreign_keys = ON", f"busy_timeout = {int(busy_timeout_ms)}"]
    if wal_mode:
        pragmas.append("journal_mode = WAL")
    return pragmas


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Iterator[sqlite3.Connection]:
    """Open ``db_path`` (creating parent directories) and yield the connection.

    WAL is never requested for ``":memory:"`` databases.

    Raises:
        sqlite3.OperationalError: If the file cannot be opened or stays locked.
    """
    on_disk = db_path != IN_MEMORY
    if on_disk:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    with closing(sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)) as conn:
        conn.row_factory = sqlite3.Row
        for pragma in _session_pragmas(wal_mode and on_disk, busy_timeout_ms):
            conn.execute(f"PRAGMA {pragma};")
        with conn:
            yield conn
        logger.debug("Committed and closing %s", db_path)


def connection_for(config: "DatabaseConfig"):
    """``get_connection()`` with settings taken from ``config``."""
    return get_connection(
        config.db_path,
        wal_mode=config.wal_mode,
        busy_timeout_ms=config.busy_timeout_ms,
    )
