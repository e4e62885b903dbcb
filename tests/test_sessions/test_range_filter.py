"""Tests for the trailing range filter."""

from datetime import timedelta

import pytest

from conftest import ms
from readstats.dates import MS_PER_DAY
from readstats.sessions.extractor import NormalizedSession, extract_sessions
from readstats.sessions.range_filter import filter_sessions, range_start_ms
from readstats.settings.schemas import TimeRange


def _session(end_ms: int, seconds: float = 60) -> NormalizedSession:
    return NormalizedSession(
        id=f"b-0-{end_ms}",
        book_id="b",
        book_position=0,
        title="Book",
        seconds=seconds,
        pages_estimate=0,
        end_ms=end_ms,
        local_date_key="2025-01-01",
    )


class TestRangeStart:
    """Tests for range_start_ms."""

    @pytest.mark.parametrize(
        "time_range,days",
        [(TimeRange.WEEK, 7), (TimeRange.MONTH, 30), (TimeRange.QUARTER, 90)],
    )
    def test_bounded_ranges(self, time_range, days):
        now_ms = 10_000 * MS_PER_DAY
        assert range_start_ms(time_range, now_ms) == now_ms - days * 86_400_000

    def test_all_is_unbounded(self):
        assert range_start_ms(TimeRange.ALL, 123) is None


class TestFilterSessions:
    """Tests for filter_sessions."""

    def test_cutoff_is_inclusive(self):
        """A session ending exactly at the cutoff is kept."""
        now_ms = 1000 * MS_PER_DAY
        cutoff = now_ms - 7 * MS_PER_DAY
        sessions = [_session(cutoff - 1), _session(cutoff), _session(now_ms)]

        kept = filter_sessions(sessions, TimeRange.WEEK, now_ms)

        assert [s.end_ms for s in kept] == [cutoff, now_ms]

    def test_all_keeps_everything(self):
        sessions = [_session(0), _session(5 * MS_PER_DAY)]
        assert filter_sessions(sessions, TimeRange.ALL, MS_PER_DAY * 1000) == sessions

    def test_sample_library(self, sample_books, now, tz):
        sessions = extract_sessions(sample_books, tz)

        week = filter_sessions(sessions, TimeRange.WEEK, ms(now))
        month = filter_sessions(sessions, TimeRange.MONTH, ms(now))

        assert sum(s.seconds for s in week) == 6800
        assert sum(s.seconds for s in month) == 8000

    def test_order_preserved(self, sample_books, now, tz):
        sessions = extract_sessions(sample_books, tz)
        kept = filter_sessions(sessions, TimeRange.QUARTER, ms(now))
        assert kept == sessions

    def test_future_sessions_kept(self, now):
        future = _session(ms(now + timedelta(days=2)))
        assert filter_sessions([future], TimeRange.WEEK, ms(now)) == [future]
