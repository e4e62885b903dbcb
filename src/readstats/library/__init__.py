"""Book snapshots supplied by the library collaborator."""

from .loader import LibraryLoadError, coerce_books, load_books

__all__ = ["LibraryLoadError", "coerce_books", "load_books"]
