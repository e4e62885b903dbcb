"""Scalar reading metrics: core KPIs, weekly challenge and year in review.

Core KPIs are computed over the sessions in the selected range. The weekly
challenge and the year in review always use the full session history, so
they read the same whatever range the dashboard shows.
"""

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional, Sequence

from ..config import DEFAULT_WEEKLY_GOAL_SECONDS
from ..dates import local_midnight_ms, parse_timestamp_ms, week_start
from ..db.schemas import BookRecord, clamp, round_half_up
from ..sessions.extractor import NormalizedSession


@dataclass(frozen=True)
class CoreStats:
    """Headline numbers for the dashboard."""

    total_books: int = 0
    finished_books: int = 0
    in_progress_books: int = 0
    completion_rate: int = 0  # percent
    average_session_seconds: int = 0
    tracked_sessions: int = 0
    total_seconds: float = 0.0
    completed_pages: int = 0


@dataclass(frozen=True)
class WeeklyChallenge:
    """Progress toward the weekly reading-time goal."""

    week_seconds: float = 0.0
    percent: int = 0
    remaining: float = float(DEFAULT_WEEKLY_GOAL_SECONDS)
    goal_seconds: int = DEFAULT_WEEKLY_GOAL_SECONDS


@dataclass(frozen=True)
class YearInReview:
    """Totals for the current calendar year."""

    year: int
    year_seconds: float = 0.0
    year_pages: float = 0.0
    finished_this_year: int = 0
    sessions_count: int = 0


def total_seconds(sessions: Sequence[NormalizedSession]) -> float:
    """Sum of session durations."""
    return sum(session.seconds for session in sessions)


def completion_rate(books: Sequence[BookRecord]) -> int:
    """Percentage of books finished, 0 for an empty library."""
    if not books:
        return 0
    finished = sum(1 for book in books if book.is_finished)
    return round_half_up(finished / len(books) * 100)


def average_session_seconds(sessions: Sequence[NormalizedSession]) -> int:
    """Rounded mean session length, 0 when there are no sessions."""
    if not sessions:
        return 0
    return round_half_up(total_seconds(sessions) / len(sessions))


def summarize_core(
    books: Sequence[BookRecord],
    sessions: Sequence[NormalizedSession],
) -> CoreStats:
    """Compute the core KPIs.

    Args:
        books: All books in the library
        sessions: Sessions filtered to the selected range

    Returns:
        CoreStats
    """
    finished = sum(1 for book in books if book.is_finished)
    in_progress = sum(1 for book in books if 0 < book.progress < 100)

    return CoreStats(
        total_books=len(books),
        finished_books=finished,
        in_progress_books=in_progress,
        completion_rate=completion_rate(books),
        average_session_seconds=average_session_seconds(sessions),
        tracked_sessions=len(sessions),
        total_seconds=total_seconds(sessions),
        completed_pages=sum(book.read_pages_estimate for book in books),
    )


def weekly_challenge(
    sessions: Sequence[NormalizedSession],
    today: date,
    tz: Optional[tzinfo] = None,
    goal_seconds: int = DEFAULT_WEEKLY_GOAL_SECONDS,
) -> WeeklyChallenge:
    """Reading time since Monday 00:00 local against the weekly goal.

    Args:
        sessions: Full, unfiltered session history
        today: Viewer's local date
        tz: Viewer time zone
        goal_seconds: Weekly goal

    Returns:
        WeeklyChallenge with percent clamped to 0-100
    """
    start_ms = local_midnight_ms(week_start(today), tz)
    week_seconds = sum(s.seconds for s in sessions if s.end_ms >= start_ms)

    percent = 0
    if goal_seconds > 0:
        percent = int(clamp(round_half_up(week_seconds / goal_seconds * 100), 0, 100))

    return WeeklyChallenge(
        week_seconds=week_seconds,
        percent=percent,
        remaining=max(0.0, goal_seconds - week_seconds),
        goal_seconds=goal_seconds,
    )


def year_in_review(
    books: Sequence[BookRecord],
    sessions: Sequence[NormalizedSession],
    today: date,
    tz: Optional[tzinfo] = None,
) -> YearInReview:
    """Totals for the local calendar year containing ``today``.

    Args:
        books: All books in the library
        sessions: Full, unfiltered session history
        today: Viewer's local date
        tz: Viewer time zone

    Returns:
        YearInReview
    """
    year = today.year
    start_ms = local_midnight_ms(date(year, 1, 1), tz)
    end_ms = (
        local_midnight_ms(date(year + 1, 1, 1), tz) if year < 9999 else None
    )

    def in_year(ms: Optional[int]) -> bool:
        if ms is None or ms < start_ms:
            return False
        return end_ms is None or ms < end_ms

    year_sessions = [s for s in sessions if in_year(s.end_ms)]
    finished = sum(
        1 for book in books
        if book.is_finished and in_year(parse_timestamp_ms(book.last_read))
    )

    return YearInReview(
        year=year,
        year_seconds=total_seconds(year_sessions),
        year_pages=sum(s.pages_estimate for s in year_sessions),
        finished_this_year=finished,
        sessions_count=len(year_sessions),
    )
