"""Human-readable labels for reading times and dates."""

import math
from datetime import tzinfo
from typing import Any, Optional

from .dates import MS_PER_DAY, Now, local_date, parse_timestamp_ms, resolve_now_ms
from .db.schemas import coerce_number


def format_duration(seconds: Any, short_label: str = "Just started") -> str:
    """Format seconds as ``"2h 5m"`` or ``"45m"``.

    Durations under a minute (or missing) are shown as ``short_label``.
    """
    total = coerce_number(seconds)
    if total < 60:
        return short_label
    hours = int(total // 3600)
    minutes = int((total % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_last_read(
    value: Any,
    now: Now = None,
    tz: Optional[tzinfo] = None,
) -> Optional[str]:
    """Relative "last read" label, None when the book was never read."""
    read_ms = parse_timestamp_ms(value)
    if read_ms is None:
        return None

    now_ms = resolve_now_ms(now)
    days_ago = max(0, math.floor((now_ms - read_ms) / MS_PER_DAY))

    if days_ago == 0:
        return "Read today"
    if days_ago == 1:
        return "Read yesterday"
    if days_ago < 7:
        return f"Read {days_ago} days ago"
    return f"Read {local_date(read_ms, tz).isoformat()}"
