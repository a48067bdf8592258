"""UTC clock helpers for task timestamps."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

_TICK = timedelta(microseconds=1)


def now_utc() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Return a timestamp strictly later than ``previous``.

    Two mutations of the same row inside one clock tick would otherwise
    share an updated_at value.

    Args:
        previous: Last timestamp recorded for the row, if any

    Returns:
        ``now_utc()``, bumped one microsecond past ``previous`` if needed
    """
    now = now_utc()
    if previous is not None and now <= previous:
        return previous + _TICK
    return now
