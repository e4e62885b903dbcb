"""Timestamp parsing and local calendar helpers.

All day bucketing is done on the viewer's local calendar: a timestamp is
converted to the local wall-clock date and keyed as ``YYYY-MM-DD``. Passing
``tz=None`` means the system local zone.
"""

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional, Union

MS_PER_DAY = 86_400_000

# Keep a day of margin inside what datetime can represent
MIN_TIMESTAMP_MS = int(datetime(1, 1, 2, tzinfo=timezone.utc).timestamp() * 1000)
MAX_TIMESTAMP_MS = int(datetime(9999, 12, 30, tzinfo=timezone.utc).timestamp() * 1000)

Now = Union[datetime, int, float, None]


def parse_timestamp_ms(value: Any) -> Optional[int]:
    """Parse a raw timestamp into epoch milliseconds.

    Accepts epoch milliseconds, ``datetime``/``date`` objects and ISO-8601
    strings. Date-only strings are UTC midnight; other naive values are read
    as local time. Returns None for anything that cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        ms = int(value)
        if MIN_TIMESTAMP_MS <= ms <= MAX_TIMESTAMP_MS:
            return ms
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            if "T" in text.upper() or " " in text or ":" in text:
                dt = datetime.fromisoformat(text)
            else:
                # Date-only strings are read as UTC midnight
                dt = datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        except ValueError:
            return None
    else:
        return None

    try:
        if dt.tzinfo is None:
            dt = dt.astimezone()
        ms = int(dt.timestamp() * 1000)
    except (OverflowError, OSError, ValueError):
        return None

    if MIN_TIMESTAMP_MS <= ms <= MAX_TIMESTAMP_MS:
        return ms
    return None


def to_local(ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Convert epoch milliseconds to an aware local datetime."""
    seconds = ms / 1000
    if tz is None:
        return datetime.fromtimestamp(seconds).astimezone()
    return datetime.fromtimestamp(seconds, tz)


def local_date(ms: int, tz: Optional[tzinfo] = None) -> date:
    """Local calendar date of a timestamp."""
    return to_local(ms, tz).date()


def local_date_key(ms: int, tz: Optional[tzinfo] = None) -> str:
    """Local calendar day key (``YYYY-MM-DD``) of a timestamp."""
    return local_date(ms, tz).isoformat()


def local_midnight_ms(day: date, tz: Optional[tzinfo] = None) -> int:
    """Epoch milliseconds of 00:00 local time on ``day``."""
    if tz is None:
        midnight = datetime.combine(day, time.min).astimezone()
    else:
        midnight = datetime.combine(day, time.min, tzinfo=tz)
    return int(midnight.timestamp() * 1000)


def resolve_now_ms(now: Now = None) -> int:
    """Resolve an injectable "now" into epoch milliseconds.

    None means the real clock. Naive datetimes are read as local time.
    """
    if now is None:
        return int(datetime.now(timezone.utc).timestamp() * 1000)
    if isinstance(now, datetime):
        if now.tzinfo is None:
            now = now.astimezone()
        return int(now.timestamp() * 1000)
    return int(now)


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def day_key_offset(key: str, days: int) -> str:
    """Shift a ``YYYY-MM-DD`` key by a number of calendar days."""
    return (date.fromisoformat(key) + timedelta(days=days)).isoformat()
