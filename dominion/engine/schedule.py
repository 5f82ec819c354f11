"""
dominion.engine.schedule — Wall-Clock Run Time Calculation
===========================================================

Pure helpers for "run once a day at HH:MM in a named zone".  The next
fire point is always recomputed from the current wall clock, so DST
changes and timer drift never accumulate: tonight's 23:00 London is
23:00 London whether the server runs in UTC or anywhere else.
"""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta
from zoneinfo import ZoneInfo


def next_run_after(
    now: datetime,
    tz: ZoneInfo,
    *,
    hour: int = 23,
    minute: int = 0,
) -> datetime:
    """Return the next ``hour:minute`` in *tz* strictly after *now*.

    If *now* is already at or past today's target (in *tz*), the target
    rolls forward one calendar day.  The result is timezone-aware in *tz*.

    Raises
    ------
    ValueError
        If *now* is naive.
    """
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be timezone-aware")

    local_now = now.astimezone(tz)
    at = time(hour=hour, minute=minute)
    target = datetime.combine(local_now.date(), at, tzinfo=tz)
    if local_now >= target:
        target = datetime.combine(local_now.date() + timedelta(days=1), at, tzinfo=tz)
    return target


def delay_until(now: datetime, target: datetime) -> timedelta:
    """Real elapsed time from *now* to *target* (never negative).

    Both sides are converted to UTC first: subtracting two datetimes that
    share a ``ZoneInfo`` compares wall clocks and is off by an hour across
    a DST change.
    """
    delta = target.astimezone(UTC) - now.astimezone(UTC)
    return max(delta, timedelta(0))


def format_delay(delta: timedelta) -> str:
    """``timedelta(hours=23, minutes=30)`` → ``"23h 30m"``."""
    total = int(delta.total_seconds())
    hours, rem = divmod(total, 3600)
    return f"{hours}h {rem // 60}m"
