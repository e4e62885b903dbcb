"""Loading book snapshots supplied by the library.

The library owns the book records; this module only turns a snapshot (a
parsed JSON document or a file holding one) into ``BookRecord`` objects.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..db.schemas import BookRecord

logger = logging.getLogger(__name__)


class LibraryLoadError(Exception):
    """Raised when a book snapshot file cannot be read."""

    pass


def coerce_books(raw: Any) -> list[BookRecord]:
    """Convert a raw book list into validated records.

    A missing or non-list value is an empty library. Entries that are not
    mappings are skipped.
    """
    if isinstance(raw, dict) and "books" in raw:
        raw = raw["books"]
    if not isinstance(raw, (list, tuple)):
        return []

    books = []
    for index, item in enumerate(raw):
        if isinstance(item, BookRecord):
            books.append(item)
            continue
        if not isinstance(item, dict):
            logger.warning(f"Skipping book entry {index}: not an object")
            continue
        try:
            books.append(BookRecord.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping book entry {index}: {e.error_count()} invalid fields")
    return books


def load_books(path: Path) -> list[BookRecord]:
    """Read a JSON book snapshot from disk.

    Args:
        path: JSON file holding a list of books, or an object with a
              ``books`` list

    Returns:
        List of BookRecord

    Raises:
        LibraryLoadError: If the file is missing or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise LibraryLoadError(f"Book file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise LibraryLoadError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise LibraryLoadError(f"Cannot read {path}: {e}") from e

    books = coerce_books(data)
    logger.info(f"Loaded {len(books)} books from {path}")
    return books

