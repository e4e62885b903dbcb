"""The reading statistics pipeline.

Turns a book snapshot and a preference set into one immutable
``DashboardResult``. Every call recomputes from scratch; the same books,
preferences and ``now`` always give an equal result.
"""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Optional

from ..config import DEFAULT_WEEKLY_GOAL_SECONDS
from ..dates import Now, local_date, resolve_now_ms
from ..library.loader import coerce_books
from ..sessions.extractor import NormalizedSession, extract_sessions
from ..sessions.range_filter import filter_sessions
from ..settings.schemas import PreferenceSet
from ..stats.daily import ChartDays, build_chart_days
from ..stats.rankings import TopBook, top_books, top_sessions
from ..stats.status import StatusShare, status_breakdown
from ..stats.summary import (
    CoreStats,
    WeeklyChallenge,
    YearInReview,
    summarize_core,
    weekly_challenge,
    year_in_review,
)
from ..streaks.calculator import StreakStats, compute_streaks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardResult:
    """Everything the reading statistics dashboard shows."""

    preferences: PreferenceSet
    generated_at_ms: int
    core_stats: CoreStats
    chart_days: ChartDays
    streak_stats: StreakStats
    weekly_challenge: WeeklyChallenge
    year_in_review: YearInReview
    status_breakdown: tuple[StatusShare, ...] = ()
    top_books: tuple[TopBook, ...] = ()
    top_sessions: tuple[NormalizedSession, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation with camelCase keys."""
        core = self.core_stats
        return {
            "preferences": self.preferences.to_storage(),
            "generatedAt": self.generated_at_ms,
            "coreStats": {
                "totalBooks": core.total_books,
                "finishedBooks": core.finished_books,
                "inProgressBooks": core.in_progress_books,
                "completionRate": core.completion_rate,
                "averageSessionSeconds": core.average_session_seconds,
                "trackedSessions": core.tracked_sessions,
                "totalSeconds": core.total_seconds,
                "completedPages": core.completed_pages,
            },
            "chartDays": {
                "days": [
                    {
                        "dateKey": day.date_key,
                        "label": day.short_label,
                        "fullLabel": day.full_label,
                        "seconds": day.seconds,
                        "pagesEstimate": day.pages_estimate,
                        "titles": list(day.titles),
                    }
                    for day in self.chart_days.days
                ],
                "maxDaySeconds": self.chart_days.max_day_seconds,
            },
            "streakStats": {
                "currentStreak": self.streak_stats.current_streak,
                "bestStreak": self.streak_stats.best_streak,
                "activeDays": self.streak_stats.active_days,
            },
            "weeklyChallenge": {
                "weekSeconds": self.weekly_challenge.week_seconds,
                "percent": self.weekly_challenge.percent,
                "remaining": self.weekly_challenge.remaining,
                "goalSeconds": self.weekly_challenge.goal_seconds,
            },
            "yearInReview": {
                "year": self.year_in_review.year,
                "yearSeconds": self.year_in_review.year_seconds,
                "yearPages": self.year_in_review.year_pages,
                "finishedThisYear": self.year_in_review.finished_this_year,
                "sessionsCount": self.year_in_review.sessions_count,
            },
            "statusBreakdown": [
                {"label": share.status.value, "count": share.count, "percent": share.percent}
                for share in self.status_breakdown
            ],
            "topBooks": [
                {
                    "id": book.book_id,
                    "title": book.title,
                    "author": book.author,
                    "progress": book.progress,
                    "trackedSeconds": book.tracked_seconds,
                }
                for book in self.top_books
            ],
            "topSessions": [
                {
                    "id": session.id,
                    "bookId": session.book_id,
                    "title": session.title,
                    "seconds": session.seconds,
                    "pagesEstimate": session.pages_estimate,
                    "endMs": session.end_ms,
                    "dateKey": session.local_date_key,
                }
                for session in self.top_sessions
            ],
        }


def compute_dashboard(
    books: Any,
    preferences: Optional[PreferenceSet] = None,
    now: Now = None,
    tz: Optional[tzinfo] = None,
    weekly_goal_seconds: int = DEFAULT_WEEKLY_GOAL_SECONDS,
) -> DashboardResult:
    """Compute the full dashboard for one snapshot.

    Args:
        books: BookRecord list, or raw book mappings from the library
        preferences: Validated preferences (defaults when None)
        now: Reference time; the real clock when None
        tz: Viewer time zone; the system zone when None
        weekly_goal_seconds: Weekly challenge goal

    Returns:
        DashboardResult
    """
    preferences = preferences or PreferenceSet()
    records = coerce_books(books)
    now_ms = resolve_now_ms(now)
    today = local_date(now_ms, tz)

    sessions = extract_sessions(records, tz)
    in_range = filter_sessions(sessions, preferences.time_range, now_ms)

    logger.debug(
        f"Computing dashboard: {len(records)} books, {len(sessions)} sessions, "
        f"{len(in_range)} in {preferences.time_range.value}"
    )

    return DashboardResult(
        preferences=preferences,
        generated_at_ms=now_ms,
        core_stats=summarize_core(records, in_range),
        chart_days=build_chart_days(in_range, preferences.time_range, today),
        streak_stats=compute_streaks(sessions, today),
        weekly_challenge=weekly_challenge(sessions, today, tz, weekly_goal_seconds),
        year_in_review=year_in_review(records, sessions, today, tz),
        status_breakdown=status_breakdown(records),
        top_books=top_books(records, in_range),
        top_sessions=top_sessions(in_range),
    )
