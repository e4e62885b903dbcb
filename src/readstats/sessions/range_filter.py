"""Selecting sessions inside the dashboard's trailing time window."""

from typing import Iterable, Optional

from ..dates import MS_PER_DAY
from ..settings.schemas import TimeRange
from .extractor import NormalizedSession


def range_start_ms(time_range: TimeRange, now_ms: int) -> Optional[int]:
    """Earliest included end time for a range, None when unbounded."""
    days = time_range.days
    if days is None:
        return None
    return now_ms - days * MS_PER_DAY


def filter_sessions(
    sessions: Iterable[NormalizedSession],
    time_range: TimeRange,
    now_ms: int,
) -> list[NormalizedSession]:
    """Keep sessions ending at or after the range start."""
    start = range_start_ms(time_range, now_ms)
    if start is None:
        return list(sessions)
    return [s for s in sessions if s.end_ms >= start]
