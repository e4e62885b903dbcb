"""Flattening book session logs into normalized session rows."""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional, Sequence

from ..dates import local_date_key, parse_timestamp_ms
from ..db.schemas import BookRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedSession:
    """A session with a resolved end time, local day and page estimate."""

    id: str
    book_id: str
    book_position: int  # index of the book in the library snapshot
    title: str
    seconds: float
    pages_estimate: float
    end_ms: int
    local_date_key: str


def extract_sessions(
    books: Sequence[BookRecord],
    tz: Optional[tzinfo] = None,
) -> list[NormalizedSession]:
    """Flatten every book's sessions into one list.

    A session's time is its end, or its start when the end is missing;
    sessions with neither are dropped. Pages are apportioned from the book's
    estimated pages read in proportion to each session's duration.

    Args:
        books: Book records, in library order
        tz: Viewer time zone for day keys (None for system local)

    Returns:
        Sessions in book order, then recorded order within each book
    """
    sessions = []
    dropped = 0

    for position, book in enumerate(books):
        pages_per_second = book.pages_per_second

        for index, record in enumerate(book.reading_sessions):
            raw_time = record.end_at if record.end_at is not None else record.start_at
            end_ms = parse_timestamp_ms(raw_time)
            if end_ms is None:
                dropped += 1
                continue

            sessions.append(NormalizedSession(
                id=f"{book.id}-{index}-{end_ms}",
                book_id=book.id,
                book_position=position,
                title=book.title,
                seconds=record.seconds,
                pages_estimate=record.seconds * pages_per_second,
                end_ms=end_ms,
                local_date_key=local_date_key(end_ms, tz),
            ))

    if dropped:
        logger.debug(f"Dropped {dropped} sessions without a usable timestamp")

    return sessions
