"""UTC time helpers shared by the store and the aggregation engine."""

import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def iso(dt: datetime) -> str:
    """Format a datetime as ISO-8601 in UTC (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored or user-supplied timestamp into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (with ``Z`` or an offset, or naive)
    and Unix epoch seconds. Returns None for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_today(clock: Clock = utc_now) -> date:
    """Return the current UTC calendar day according to ``clock``."""
    now = clock()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()
