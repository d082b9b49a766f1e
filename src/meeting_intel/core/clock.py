# src/meeting_intel/core/clock.py
"""
Clock / Time Window Utilities

Pure functions over epoch-millisecond instants:
- Calendar day boundaries (start/end of today)
- Two distinct "end of week" definitions:
    * end_of_week: rolling, now + 7 days at 23:59:59.999
    * end_of_week_monday_aligned: Sunday 23:59:59.999 of the Monday-start week
- Elapsed checks

All boundaries are computed in a single deployment-wide time zone (UTC unless
configured). There is no per-user time zone support.

Nothing here reads the wall clock except now_ms(), which only the outer
surfaces (HTTP handlers, job runner) may call.
"""

import time
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

UTC = timezone.utc


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC when empty."""
    if not name or name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def to_datetime(instant: int, tz: tzinfo = UTC) -> datetime:
    """Convert epoch milliseconds to an aware datetime in `tz`."""
    return datetime.fromtimestamp(instant / 1000, tz=tz)


def to_instant(dt: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return int(round(dt.timestamp() * 1000))


def _start_of_day(day: date, tz: tzinfo) -> int:
    return to_instant(datetime(day.year, day.month, day.day, tzinfo=tz))


def _end_of_day(day: date, tz: tzinfo) -> int:
    return to_instant(
        datetime(day.year, day.month, day.day, 23, 59, 59, 999000, tzinfo=tz)
    )


def start_of_today(now: int, tz: tzinfo = UTC) -> int:
    """00:00:00.000 of the calendar day containing `now`."""
    return _start_of_day(to_datetime(now, tz).date(), tz)


def end_of_today(now: int, tz: tzinfo = UTC) -> int:
    """23:59:59.999 of the calendar day containing `now`."""
    return _end_of_day(to_datetime(now, tz).date(), tz)


def end_of_week(now: int, tz: tzinfo = UTC) -> int:
    """
    Rolling week end: the calendar day seven days after `now`, at 23:59:59.999.

    Not an ISO week. Used by action-item grouping.
    """
    target = to_datetime(now, tz).date() + timedelta(days=7)
    return _end_of_day(target, tz)


def end_of_week_monday_aligned(now: int, tz: tzinfo = UTC) -> int:
    """
    Sunday 23:59:59.999 of the Monday-start week containing `now`.

    On a Sunday this is the end of that same day. Used by the deadline classifier.
    """
    today = to_datetime(now, tz).date()
    days_until_sunday = 6 - today.weekday()
    return _end_of_day(today + timedelta(days=days_until_sunday), tz)


def has_elapsed(since: int, duration_ms: int, now: int) -> bool:
    """True when strictly more than `duration_ms` has passed since `since`."""
    return now - since > duration_ms
