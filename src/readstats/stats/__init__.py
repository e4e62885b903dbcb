"""Reading statistics derived from normalized sessions."""

from .daily import ChartDays, DayBucket, build_chart_days
from .rankings import TopBook, top_books, top_sessions
from .status import BookStatus, StatusShare, classify_book, status_breakdown
from .summary import (
    CoreStats,
    WeeklyChallenge,
    YearInReview,
    summarize_core,
    weekly_challenge,
    year_in_review,
)

__all__ = [
    "ChartDays",
    "DayBucket",
    "build_chart_days",
    "TopBook",
    "top_books",
    "top_sessions",
    "BookStatus",
    "StatusShare",
    "classify_book",
    "status_breakdown",
    "CoreStats",
    "WeeklyChallenge",
    "YearInReview",
    "summarize_core",
    "weekly_challenge",
    "year_in_review",
]
