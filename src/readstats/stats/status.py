"""Book lifecycle status and the status distribution."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..db.schemas import BookRecord, round_half_up


class BookStatus(str, Enum):
    """Where a book is in the reading lifecycle."""

    FINISHED = "Finished"
    IN_PROGRESS = "In progress"
    TO_READ = "To read"
    NOT_STARTED = "Not started"


@dataclass(frozen=True)
class StatusShare:
    """Count and rounded percentage of books with one status."""

    status: BookStatus
    count: int = 0
    percent: int = 0


def classify_book(book: BookRecord) -> BookStatus:
    """Classify a book; the checks are ordered by priority."""
    if book.progress >= 100:
        return BookStatus.FINISHED
    if book.progress > 0:
        return BookStatus.IN_PROGRESS
    if book.is_to_read:
        return BookStatus.TO_READ
    return BookStatus.NOT_STARTED


def status_breakdown(books: Sequence[BookRecord]) -> tuple[StatusShare, ...]:
    """Distribution over all statuses, including those with no books.

    Percentages are rounded independently and may not sum to 100.
    """
    counts = Counter(classify_book(book) for book in books)
    total = len(books) or 1

    return tuple(
        StatusShare(
            status=status,
            count=counts[status],
            percent=round_half_up(counts[status] / total * 100),
        )
        for status in BookStatus
    )
