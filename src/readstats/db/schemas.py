"""Pydantic schemas for the records the analytics engine reads.

Book and session records come from the library collaborator with loosely
typed, optional fields. These schemas give every field a type and a default
and coerce malformed values instead of rejecting them, so everything after
this boundary can trust the record shape.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


def coerce_number(value: Any) -> float:
    """Read a numeric field, treating missing or non-numeric values as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


class RecordBase(BaseModel):
    """Shared config: frozen, camelCase keys accepted alongside snake_case."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class SessionRecord(RecordBase):
    """One recorded reading session as stored with a book."""

    start_at: Optional[Any] = None
    end_at: Optional[Any] = None
    seconds: float = Field(0.0, ge=0)

    @field_validator("seconds", mode="before")
    @classmethod
    def coerce_seconds(cls, v: Any) -> float:
        return max(0.0, coerce_number(v))


class BookRecord(RecordBase):
    """A book as supplied by the library, read-only to this package."""

    id: str = ""
    title: str = "Untitled"
    author: str = ""
    progress: int = Field(0, ge=0, le=100)  # whole percent
    estimated_pages: int = Field(0, ge=0)
    reading_time: float = Field(0.0, ge=0)  # accumulated seconds
    last_read: Optional[Any] = None
    is_to_read: bool = False
    reading_sessions: tuple[SessionRecord, ...] = ()

    @field_validator("id", "author", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        if v is None or v == "":
            return "Untitled"
        return v if isinstance(v, str) else str(v)

    @field_validator("progress", mode="before")
    @classmethod
    def clamp_progress(cls, v: Any) -> int:
        return int(clamp(round_half_up(coerce_number(v)), 0, 100))

    @field_validator("estimated_pages", mode="before")
    @classmethod
    def coerce_pages(cls, v: Any) -> int:
        return max(0, int(coerce_number(v)))

    @field_validator("reading_time", mode="before")
    @classmethod
    def coerce_reading_time(cls, v: Any) -> float:
        return max(0.0, coerce_number(v))

    @field_validator("is_to_read", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes")
        return bool(v)

    @field_validator("reading_sessions", mode="before")
    @classmethod
    def keep_session_mappings(cls, v: Any) -> list:
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, SessionRecord))]

    @property
    def is_finished(self) -> bool:
        """Whether the book has been read to the end."""
        return self.progress >= 100

    @property
    def read_pages_estimate(self) -> int:
        """Pages read so far, estimated from progress and page count."""
        if self.estimated_pages <= 0:
            return 0
        return round_half_up(self.estimated_pages * self.progress / 100)

    @property
    def pages_per_second(self) -> float:
        """Average reading pace over the book's accumulated reading time."""
        pages = self.read_pages_estimate
        if self.reading_time > 0 and pages > 0:
            return pages / self.reading_time
        return 0.0
