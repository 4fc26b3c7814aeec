"""
Clock and date-formatting helpers.

The engine never reads the wall clock directly: services accept a ``clock``
callable so tests can pin the current time. ``InsightService`` defaults to
``local_now`` because the time-of-day label follows the user's wall clock;
stored timestamps use ``utcnow``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def local_now() -> datetime:
    """Return the current local wall-clock time (timezone-aware)."""
    return datetime.now().astimezone()


def time_of_day(hour: int) -> str:
    """Map an hour (0–23) to ``"morning"``, ``"afternoon"`` or ``"evening"``.

    Morning is before 12:00, afternoon before 18:00, evening otherwise.
    """
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"


def format_day_month_year(dt: datetime) -> str:
    """Format a datetime as ``dd/mm/YYYY``, e.g. ``"05/03/2024"``."""
    return dt.strftime("%d/%m/%Y")
