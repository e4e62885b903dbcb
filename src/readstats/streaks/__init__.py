"""Reading streaks."""

from .calculator import (
    StreakStats,
    active_day_keys,
    compute_streaks,
    current_streak,
    longest_streak,
)

__all__ = [
    "StreakStats",
    "active_day_keys",
    "compute_streaks",
    "current_streak",
    "longest_streak",
]
