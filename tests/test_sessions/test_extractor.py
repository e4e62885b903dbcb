"""Tests for session extraction."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from conftest import make_book, ms, session_at
from readstats.sessions.extractor import NormalizedSession, extract_sessions


class TestExtractSessions:
    """Tests for extract_sessions."""

    def test_flattens_in_book_then_session_order(self, sample_books, tz):
        """Sessions come out book by book, in recorded order."""
        sessions = extract_sessions(sample_books, tz)

        assert [s.book_id for s in sessions] == ["dune", "dune", "dune", "hail-mary"]
        assert [s.seconds for s in sessions] == [1200, 1800, 3000, 2000]
        assert [s.book_position for s in sessions] == [0, 0, 0, 1]

    def test_session_fields(self, tz):
        end = datetime(2024, 1, 5, 20, 0, tzinfo=timezone.utc)
        book = make_book("b1", title="Dune", readingSessions=[session_at(end, 900)])

        [session] = extract_sessions([book], tz)

        assert isinstance(session, NormalizedSession)
        assert session.id == f"b1-0-{ms(end)}"
        assert session.book_id == "b1"
        assert session.title == "Dune"
        assert session.seconds == 900
        assert session.end_ms == ms(end)
        assert session.local_date_key == "2024-01-05"

    def test_ids_are_unique(self, sample_books, tz):
        sessions = extract_sessions(sample_books, tz)
        assert len({s.id for s in sessions}) == len(sessions)

    def test_start_used_when_end_missing(self, tz):
        """A session without an end time is placed at its start time."""
        start = datetime(2024, 1, 3, 9, 0, tzinfo=timezone.utc)
        book = make_book(readingSessions=[session_at(start, 300, start_only=True)])

        [session] = extract_sessions([book], tz)

        assert session.end_ms == ms(start)
        assert session.local_date_key == "2024-01-03"

    def test_session_without_times_dropped(self, tz):
        """Sessions with neither end nor start are excluded."""
        end = datetime(2024, 1, 3, 9, 0, tzinfo=timezone.utc)
        book = make_book(readingSessions=[
            {"seconds": 500},
            {"startAt": None, "endAt": None, "seconds": 100},
            {"endAt": "garbage", "seconds": 100},
            session_at(end, 200),
        ])

        sessions = extract_sessions([book], tz)

        assert [s.seconds for s in sessions] == [200]
        # Index still reflects the position in the book's list
        assert sessions[0].id.startswith("b1-3-")

    def test_unparsable_end_does_not_fall_back(self, tz):
        """Only a missing end falls back to the start time."""
        book = make_book(readingSessions=[
            {"startAt": "2024-01-01T10:00:00Z", "endAt": "bad", "seconds": 60},
        ])
        assert extract_sessions([book], tz) == []

    def test_bad_seconds_count_as_zero(self, tz):
        book = make_book(readingSessions=[
            {"endAt": "2024-01-01T10:00:00Z", "seconds": "n/a"},
            {"endAt": "2024-01-01T11:00:00Z", "seconds": -20},
        ])
        sessions = extract_sessions([book], tz)
        assert [s.seconds for s in sessions] == [0, 0]

    def test_pages_apportioned_by_duration(self, tz):
        """Pages read are split across sessions by their share of time."""
        book = make_book(
            estimatedPages=300,
            progress=50,
            readingTime=1500,
            readingSessions=[
                {"endAt": "2024-01-01T10:00:00Z", "seconds": 500},
                {"endAt": "2024-01-02T10:00:00Z", "seconds": 1000},
            ],
        )

        sessions = extract_sessions([book], tz)

        assert [s.pages_estimate for s in sessions] == pytest.approx([50, 100])
        assert sum(s.pages_estimate for s in sessions) == pytest.approx(
            book.read_pages_estimate
        )

    def test_no_pages_without_reading_time(self, tz):
        book = make_book(
            estimatedPages=300,
            progress=50,
            readingTime=0,
            readingSessions=[{"endAt": "2024-01-01T10:00:00Z", "seconds": 500}],
        )
        [session] = extract_sessions([book], tz)
        assert session.pages_estimate == 0

    def test_local_day_near_midnight(self):
        """Day keys follow the viewer's zone, not UTC."""
        new_york = ZoneInfo("America/New_York")
        book = make_book(readingSessions=[{"endAt": "2024-01-06T03:30:00Z", "seconds": 60}])

        [session] = extract_sessions([book], new_york)

        assert session.local_date_key == "2024-01-05"

    def test_empty_library(self, tz):
        assert extract_sessions([], tz) == []

    def test_epoch_millisecond_timestamps(self, tz):
        end = datetime(2024, 2, 1, 8, tzinfo=timezone.utc)
        book = make_book(readingSessions=[{"endAt": ms(end), "seconds": 60}])

        [session] = extract_sessions([book], tz)

        assert session.end_ms == ms(end)
        assert session.local_date_key == "2024-02-01"

    def test_sessions_are_immutable(self, sample_books, tz):
        session = extract_sessions(sample_books, tz)[0]
        with pytest.raises(Exception):
            session.seconds = 1
