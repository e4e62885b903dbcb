"""Pytest configuration and shared fixtures.

This module provides fixtures for testing readstats: a fixed clock and time
zone, book and session builders, and temporary databases.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest

from readstats.config import reset_config
from readstats.db.schemas import BookRecord
from readstats.db.sqlite import Database, reset_db


# ============================================================================
# Clock Fixtures
# ============================================================================


# Wednesday; the ISO week starts Monday 2025-03-10
FIXED_NOW = datetime(2025, 3, 12, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def tz():
    """Viewer time zone used by the tests."""
    return timezone.utc


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return FIXED_NOW


def ms(dt: datetime) -> int:
    """Epoch milliseconds of an aware datetime."""
    return int(dt.timestamp() * 1000)


def session_at(dt: datetime, seconds: float = 600, start_only: bool = False) -> dict:
    """Raw session record ending at ``dt``."""
    if start_only:
        return {"startAt": dt.isoformat(), "seconds": seconds}
    return {
        "startAt": (dt - timedelta(seconds=seconds)).isoformat(),
        "endAt": dt.isoformat(),
        "seconds": seconds,
    }


def make_book(book_id: str = "b1", **fields) -> BookRecord:
    """Build a book record from camelCase or snake_case fields."""
    data = {"id": book_id, "title": f"Book {book_id}", "author": "Test Author"}
    data.update(fields)
    return BookRecord.model_validate(data)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def memory_db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Point the global database at a temporary file."""
    reset_db()
    reset_config()

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    os.environ["READSTATS_DB_PATH"] = str(db_path)
    os.environ["READSTATS_TIMEZONE"] = "UTC"

    yield db_path

    reset_db()
    reset_config()
    for key in ("READSTATS_DB_PATH", "READSTATS_TIMEZONE"):
        os.environ.pop(key, None)
    if db_path.exists():
        db_path.unlink()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_books(now) -> list[BookRecord]:
    """A small library with sessions spread over the last weeks."""
    return [
        make_book(
            "dune",
            title="Dune",
            author="Frank Herbert",
            progress=100,
            estimatedPages=600,
            readingTime=6000,
            lastRead=(now - timedelta(days=1)).isoformat(),
            readingSessions=[
                session_at(now - timedelta(days=20), 1200),
                session_at(now - timedelta(days=2), 1800),
                session_at(now - timedelta(days=1), 3000),
            ],
        ),
        make_book(
            "hail-mary",
            title="Project Hail Mary",
            author="Andy Weir",
            progress=50,
            estimatedPages=400,
            readingTime=2000,
            readingSessions=[
                session_at(now - timedelta(hours=2), 2000),
            ],
        ),
        make_book("gatsby", title="The Great Gatsby", isToRead=True),
        make_book("untouched", title="Untouched"),
    ]
