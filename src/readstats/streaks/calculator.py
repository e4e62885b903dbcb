"""Consecutive reading-day streaks."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..sessions.extractor import NormalizedSession


@dataclass(frozen=True)
class StreakStats:
    """Current and best streaks, in days."""

    current_streak: int = 0
    best_streak: int = 0
    active_days: int = 0


def active_day_keys(sessions: Iterable[NormalizedSession]) -> set[str]:
    """Local date keys with at least one session."""
    return {session.local_date_key for session in sessions}


def longest_streak(active: set[str]) -> int:
    """Longest run of consecutive active days."""
    best = 0
    running = 0
    previous = None

    for key in sorted(active):
        day = date.fromisoformat(key)
        if previous is not None and day - previous == timedelta(days=1):
            running += 1
        else:
            running = 1
        best = max(best, running)
        previous = day

    return best


def current_streak(active: set[str], today: date) -> int:
    """Run of active days ending today, or yesterday if today has no reading yet."""
    if today.isoformat() in active:
        anchor = today
    elif (today - timedelta(days=1)).isoformat() in active:
        anchor = today - timedelta(days=1)
    else:
        return 0

    count = 0
    day = anchor
    while day.isoformat() in active:
        count += 1
        day -= timedelta(days=1)
    return count


def compute_streaks(sessions: Iterable[NormalizedSession], today: date) -> StreakStats:
    """Compute streaks over the full session history.

    Args:
        sessions: All sessions, not limited to the dashboard range
        today: Viewer's local date

    Returns:
        StreakStats
    """
    active = active_day_keys(sessions)
    return StreakStats(
        current_streak=current_streak(active, today),
        best_streak=longest_streak(active),
        active_days=len(active),
    )
