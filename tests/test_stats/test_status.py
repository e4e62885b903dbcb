"""Tests for book status classification."""

import pytest

from conftest import make_book
from readstats.stats.status import BookStatus, classify_book, status_breakdown


class TestClassifyBook:
    """Tests for classify_book."""

    @pytest.mark.parametrize(
        "progress,to_read,expected",
        [
            (100, False, BookStatus.FINISHED),
            (100, True, BookStatus.FINISHED),
            (40, True, BookStatus.IN_PROGRESS),
            (0.5, False, BookStatus.IN_PROGRESS),
            (0, True, BookStatus.TO_READ),
            (0, False, BookStatus.NOT_STARTED),
        ],
    )
    def test_priority_chain(self, progress, to_read, expected):
        book = make_book(progress=progress, isToRead=to_read)
        assert classify_book(book) == expected

    def test_over_100_is_finished(self):
        assert classify_book(make_book(progress=250)) == BookStatus.FINISHED


class TestStatusBreakdown:
    """Tests for status_breakdown."""

    def test_even_distribution(self):
        books = [
            make_book("a", progress=0),
            make_book("b", progress=50),
            make_book("c", progress=100),
            make_book("d", progress=0, isToRead=True),
        ]

        breakdown = status_breakdown(books)

        assert {s.status: s.count for s in breakdown} == {
            BookStatus.FINISHED: 1,
            BookStatus.IN_PROGRESS: 1,
            BookStatus.TO_READ: 1,
            BookStatus.NOT_STARTED: 1,
        }
        assert all(s.percent == 25 for s in breakdown)

    def test_all_labels_present_in_order(self):
        breakdown = status_breakdown([make_book(progress=100)])

        assert [s.status.value for s in breakdown] == [
            "Finished", "In progress", "To read", "Not started",
        ]
        assert [s.count for s in breakdown] == [1, 0, 0, 0]
        assert [s.percent for s in breakdown] == [100, 0, 0, 0]

    def test_percentages_rounded_independently(self):
        books = [make_book("a", progress=100), make_book("b", progress=10), make_book("c")]

        breakdown = status_breakdown(books)

        assert [s.percent for s in breakdown] == [33, 33, 0, 33]

    def test_empty_library(self):
        breakdown = status_breakdown([])
        assert len(breakdown) == 4
        assert all(s.count == 0 and s.percent == 0 for s in breakdown)
