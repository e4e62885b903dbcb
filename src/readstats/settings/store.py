"""Persistence of dashboard preferences.

The analytics engine only ever receives a validated ``PreferenceSet``; the
stores here are the only code that touches the underlying storage.
"""

import json
import logging
from typing import Any, Optional, Protocol

from ..db.sqlite import Database, get_db
from .models import Preference
from .schemas import ActivityView, LayoutMode, PreferenceSet, TimeRange

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "reading-stats-preferences"


class PreferenceStore(Protocol):
    """Load and save the dashboard preference set."""

    def load(self) -> PreferenceSet: ...

    def save(self, preferences: PreferenceSet) -> None: ...


class SqlPreferenceStore:
    """Stores the preference set as JSON in the ``preferences`` table."""

    def __init__(self, db: Optional[Database] = None, key: str = PREFERENCES_KEY):
        """Initialize the store.

        Args:
            db: Database instance
            key: Name the preference set is stored under
        """
        self.db = db or get_db()
        self.key = key

    def load(self) -> PreferenceSet:
        """Load stored preferences, defaulting any missing or invalid field."""
        with self.db.get_session() as session:
            row = session.get(Preference, self.key)
            raw_text = row.value if row else None

        if raw_text is None:
            return PreferenceSet()

        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError:
            logger.warning(f"Stored preferences under {self.key!r} are not valid JSON")
            raw = None

        return PreferenceSet.from_raw(raw)

    def save(self, preferences: PreferenceSet) -> None:
        """Persist the full preference set."""
        payload = json.dumps(preferences.to_storage())

        with self.db.get_session() as session:
            row = session.get(Preference, self.key)
            if row:
                row.value = payload
            else:
                session.add(Preference(key=self.key, value=payload))

    def clear(self) -> None:
        """Remove stored preferences so the defaults apply again."""
        with self.db.get_session() as session:
            row = session.get(Preference, self.key)
            if row:
                session.delete(row)


class MemoryPreferenceStore:
    """Keeps the raw stored value in memory. Used for tests and one-off runs."""

    def __init__(self, raw: Any = None):
        self.raw = raw
        self.saves = 0

    def load(self) -> PreferenceSet:
        return PreferenceSet.from_raw(self.raw)

    def save(self, preferences: PreferenceSet) -> None:
        self.raw = preferences.to_storage()
        self.saves += 1


def update_preferences(
    store: PreferenceStore,
    time_range: Any = None,
    layout_mode: Any = None,
    activity_view: Any = None,
) -> PreferenceSet:
    """Change one or more preference fields and persist the result.

    Fields left as None keep their current value. Invalid values fall back to
    the field default, the same as on load.
    """
    current = store.load()
    updated = PreferenceSet(
        time_range=(
            current.time_range if time_range is None else TimeRange.parse(time_range)
        ),
        layout_mode=(
            current.layout_mode if layout_mode is None else LayoutMode.parse(layout_mode)
        ),
        activity_view=(
            current.activity_view
            if activity_view is None
            else ActivityView.parse(activity_view)
        ),
    )
    store.save(updated)
    return updated
