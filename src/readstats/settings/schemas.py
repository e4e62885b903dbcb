"""Schemas for the reading dashboard display preferences."""

from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

OptionT = TypeVar("OptionT", bound=Enum)


def parse_option(option_type: type[OptionT], value: Any, default: OptionT) -> OptionT:
    """Map a raw stored value onto an enum member, falling back to ``default``."""
    if isinstance(value, option_type):
        return value
    try:
        return option_type(value)
    except (ValueError, TypeError):
        return default


class TimeRange(str, Enum):
    """Trailing window used for scalar metrics and rankings."""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Window length in days, None when unbounded."""
        return _RANGE_DAYS[self]

    @property
    def chart_days(self) -> int:
        """Number of days plotted in the activity chart.

        Capped separately from ``days`` so long ranges stay legible.
        """
        return _CHART_DAYS[self]

    @classmethod
    def parse(cls, value: Any) -> "TimeRange":
        return parse_option(cls, value, DEFAULT_TIME_RANGE)


_RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
    TimeRange.QUARTER: 90,
    TimeRange.ALL: None,
}

_CHART_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
    TimeRange.QUARTER: 45,
    TimeRange.ALL: 14,
}


class LayoutMode(str, Enum):
    """Which group of dashboard panels is shown."""

    DASHBOARD = "dashboard"
    BOOKS = "books"
    HABITS = "habits"

    @classmethod
    def parse(cls, value: Any) -> "LayoutMode":
        return parse_option(cls, value, DEFAULT_LAYOUT_MODE)


class ActivityView(str, Enum):
    """How the daily activity series is drawn."""

    BARS = "bars"
    LINE = "line"

    @classmethod
    def parse(cls, value: Any) -> "ActivityView":
        return parse_option(cls, value, DEFAULT_ACTIVITY_VIEW)


DEFAULT_TIME_RANGE = TimeRange.MONTH
DEFAULT_LAYOUT_MODE = LayoutMode.DASHBOARD
DEFAULT_ACTIVITY_VIEW = ActivityView.BARS


class PreferenceSet(BaseModel):
    """The three persisted dashboard preferences."""

    time_range: TimeRange = DEFAULT_TIME_RANGE
    layout_mode: LayoutMode = DEFAULT_LAYOUT_MODE
    activity_view: ActivityView = DEFAULT_ACTIVITY_VIEW

    model_config = {"frozen": True}

    @classmethod
    def from_raw(cls, raw: Any) -> "PreferenceSet":
        """Build a preference set from a stored value.

        Each field is validated on its own; an invalid or missing field falls
        back to its default without affecting the others.
        """
        if not isinstance(raw, dict):
            raw = {}
        return cls(
            time_range=TimeRange.parse(raw.get("timeRange", raw.get("time_range"))),
            layout_mode=LayoutMode.parse(raw.get("layoutMode", raw.get("layout_mode"))),
            activity_view=ActivityView.parse(
                raw.get("activityView", raw.get("activity_view"))
            ),
        )

    def to_storage(self) -> dict[str, str]:
        """Serialize under the stored key names."""
        return {
            "timeRange": self.time_range.value,
            "layoutMode": self.layout_mode.value,
            "activityView": self.activity_view.value,
        }
