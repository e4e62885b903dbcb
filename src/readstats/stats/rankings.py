"""Top books and longest sessions within the selected range."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence

from ..db.schemas import BookRecord
from ..sessions.extractor import NormalizedSession

TOP_BOOKS_LIMIT = 6
TOP_SESSIONS_LIMIT = 5


@dataclass(frozen=True)
class TopBook:
    """A book ranked by reading time tracked in the range."""

    book_id: str
    title: str
    author: str
    progress: int
    tracked_seconds: float


def tracked_seconds_by_book(sessions: Sequence[NormalizedSession]) -> dict[int, float]:
    """Sum of session seconds per book, keyed by library position.

    Ids may be missing or repeated; each book keeps its own time.
    """
    totals: dict[int, float] = defaultdict(float)
    for session in sessions:
        totals[session.book_position] += session.seconds
    return dict(totals)


def top_books(
    books: Sequence[BookRecord],
    sessions: Sequence[NormalizedSession],
    limit: int = TOP_BOOKS_LIMIT,
) -> tuple[TopBook, ...]:
    """Books with the most tracked time, ties kept in library order."""
    tracked = tracked_seconds_by_book(sessions)

    ranked = [
        TopBook(
            book_id=book.id,
            title=book.title,
            author=book.author,
            progress=book.progress,
            tracked_seconds=tracked.get(position, 0.0),
        )
        for position, book in enumerate(books)
    ]
    ranked = [entry for entry in ranked if entry.tracked_seconds > 0]
    ranked.sort(key=lambda entry: entry.tracked_seconds, reverse=True)
    return tuple(ranked[:limit])


def top_sessions(
    sessions: Sequence[NormalizedSession],
    limit: int = TOP_SESSIONS_LIMIT,
) -> tuple[NormalizedSession, ...]:
    """Longest sessions, ties kept in extraction order."""
    ranked = sorted(sessions, key=lambda session: session.seconds, reverse=True)
    return tuple(ranked[:limit])
