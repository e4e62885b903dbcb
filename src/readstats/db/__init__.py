"""Database module: record schemas and local SQLite storage."""

from .models import Base
from .schemas import BookRecord, SessionRecord, coerce_number, round_half_up
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "BookRecord",
    "SessionRecord",
    "coerce_number",
    "round_half_up",
    "Database",
    "get_db",
    "reset_db",
]
