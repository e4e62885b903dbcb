"""Dashboard display preferences."""

from .models import Preference
from .schemas import (
    DEFAULT_ACTIVITY_VIEW,
    DEFAULT_LAYOUT_MODE,
    DEFAULT_TIME_RANGE,
    ActivityView,
    LayoutMode,
    PreferenceSet,
    TimeRange,
)
from .store import (
    PREFERENCES_KEY,
    MemoryPreferenceStore,
    PreferenceStore,
    SqlPreferenceStore,
    update_preferences,
)

__all__ = [
    "DEFAULT_ACTIVITY_VIEW",
    "DEFAULT_LAYOUT_MODE",
    "DEFAULT_TIME_RANGE",
    "ActivityView",
    "LayoutMode",
    "MemoryPreferenceStore",
    "PREFERENCES_KEY",
    "Preference",
    "PreferenceSet",
    "PreferenceStore",
    "SqlPreferenceStore",
    "TimeRange",
    "update_preferences",
]
