"""Tests for book and session record schemas."""

import pytest

from readstats.db.schemas import (
    BookRecord,
    SessionRecord,
    coerce_number,
    round_half_up,
)


class TestCoercion:
    """Tests for numeric coercion helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [(5, 5.0), (2.5, 2.5), ("12", 12.0), (" 3.5 ", 3.5), (None, 0.0),
         ("abc", 0.0), ("", 0.0), (True, 0.0), (float("nan"), 0.0), ([1], 0.0)],
    )
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    def test_round_half_up(self):
        """Halves round up like Math.round."""
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2
        assert round_half_up(0.5) == 1
        assert round_half_up(-2.5) == -2


class TestSessionRecord:
    """Tests for SessionRecord."""

    def test_camel_case_fields(self):
        record = SessionRecord.model_validate(
            {"startAt": "2024-01-01T10:00:00Z", "endAt": "2024-01-01T11:00:00Z", "seconds": 3600}
        )
        assert record.start_at == "2024-01-01T10:00:00Z"
        assert record.end_at == "2024-01-01T11:00:00Z"
        assert record.seconds == 3600

    @pytest.mark.parametrize("seconds", [None, "soon", -30, float("nan")])
    def test_bad_seconds_become_zero(self, seconds):
        record = SessionRecord.model_validate({"seconds": seconds})
        assert record.seconds == 0

    def test_missing_fields(self):
        record = SessionRecord()
        assert record.start_at is None
        assert record.end_at is None
        assert record.seconds == 0


class TestBookRecord:
    """Tests for BookRecord."""

    def test_defaults(self):
        book = BookRecord()
        assert book.id == ""
        assert book.title == "Untitled"
        assert book.progress == 0
        assert book.estimated_pages == 0
        assert book.reading_time == 0
        assert book.last_read is None
        assert book.is_to_read is False
        assert book.reading_sessions == ()

    def test_camel_case_input(self):
        book = BookRecord.model_validate({
            "id": 7,
            "title": "Dune",
            "progress": 42,
            "estimatedPages": 600,
            "readingTime": 1200,
            "isToRead": True,
            "lastRead": "2024-01-01",
            "readingSessions": [{"endAt": "2024-01-01T10:00:00Z", "seconds": 60}],
        })
        assert book.id == "7"
        assert book.estimated_pages == 600
        assert book.reading_time == 1200
        assert book.is_to_read is True
        assert len(book.reading_sessions) == 1

    @pytest.mark.parametrize("progress,expected", [(150, 100), (-5, 0), ("75", 75), ("x", 0)])
    def test_progress_clamped(self, progress, expected):
        assert BookRecord(progress=progress).progress == expected

    def test_non_numeric_fields_become_zero(self):
        book = BookRecord.model_validate(
            {"estimatedPages": "lots", "readingTime": None, "progress": None}
        )
        assert book.estimated_pages == 0
        assert book.reading_time == 0
        assert book.progress == 0

    @pytest.mark.parametrize("sessions", [None, "oops", 5, {"endAt": 1}])
    def test_non_list_sessions_are_empty(self, sessions):
        book = BookRecord.model_validate({"readingSessions": sessions})
        assert book.reading_sessions == ()

    def test_non_mapping_session_entries_dropped(self):
        book = BookRecord.model_validate(
            {"readingSessions": [None, 3, {"seconds": 10}, "x"]}
        )
        assert len(book.reading_sessions) == 1

    def test_records_are_frozen(self):
        book = BookRecord(title="Dune")
        with pytest.raises(Exception):
            book.title = "Other"


class TestPageEstimates:
    """Tests for derived page estimates."""

    def test_read_pages_estimate(self):
        book = BookRecord(estimated_pages=300, progress=50)
        assert book.read_pages_estimate == 150

    def test_read_pages_rounds_half_up(self):
        book = BookRecord(estimated_pages=5, progress=50)
        assert book.read_pages_estimate == 3

    def test_no_pages_known(self):
        assert BookRecord(progress=80).read_pages_estimate == 0

    def test_pages_per_second(self):
        book = BookRecord(estimated_pages=300, progress=100, reading_time=3000)
        assert book.pages_per_second == pytest.approx(0.1)

    def test_pages_per_second_without_time(self):
        book = BookRecord(estimated_pages=300, progress=100, reading_time=0)
        assert book.pages_per_second == 0

    def test_is_finished(self):
        assert BookRecord(progress=100).is_finished
        assert not BookRecord(progress=99.4).is_finished

    @pytest.mark.parametrize("progress,expected", [(99.5, 100), (99.4, 99), (42.5, 43), ("12.49", 12)])
    def test_progress_rounded_to_whole_percent(self, progress, expected):
        book = BookRecord(progress=progress)
        assert book.progress == expected
        assert isinstance(book.progress, int)

    def test_rounded_progress_decides_finished(self):
        assert BookRecord(progress=99.6).is_finished
