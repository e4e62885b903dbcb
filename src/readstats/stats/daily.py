"""Daily activity series for the dashboard chart."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..settings.schemas import TimeRange
from ..sessions.extractor import NormalizedSession


@dataclass(frozen=True)
class DayBucket:
    """Reading activity on one local calendar day."""

    date_key: str
    short_label: str
    full_label: str
    seconds: float = 0.0
    pages_estimate: float = 0.0
    titles: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChartDays:
    """Trailing day series, oldest first."""

    days: tuple[DayBucket, ...] = ()
    max_day_seconds: float = 0.0

    @property
    def total_seconds(self) -> float:
        return sum(day.seconds for day in self.days)


def trailing_days(today: date, count: int) -> list[date]:
    """``count`` consecutive days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def build_chart_days(
    sessions: Iterable[NormalizedSession],
    time_range: TimeRange,
    today: date,
) -> ChartDays:
    """Accumulate filtered sessions into the chart's day buckets.

    Args:
        sessions: Sessions already filtered to the selected range
        time_range: Selected range; decides how many days are plotted
        today: Viewer's local date, the last bucket

    Returns:
        ChartDays with every day present, empty days at zero
    """
    days = trailing_days(today, time_range.chart_days)
    totals = {
        day.isoformat(): {"seconds": 0.0, "pages": 0.0, "titles": []}
        for day in days
    }

    for session in sessions:
        bucket = totals.get(session.local_date_key)
        if bucket is None:
            continue
        bucket["seconds"] += session.seconds
        bucket["pages"] += session.pages_estimate
        if session.title not in bucket["titles"]:
            bucket["titles"].append(session.title)

    buckets = []
    for day in days:
        data = totals[day.isoformat()]
        buckets.append(DayBucket(
            date_key=day.isoformat(),
            short_label=f"{day:%a}",
            full_label=f"{day:%a}, {day:%b} {day.day}",
            seconds=data["seconds"],
            pages_estimate=data["pages"],
            titles=tuple(data["titles"]),
        ))

    max_day_seconds = max((b.seconds for b in buckets), default=0.0)
    return ChartDays(days=tuple(buckets), max_day_seconds=max_day_seconds)
