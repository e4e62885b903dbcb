"""SQLAlchemy ORM base for the local SQLite database.

Tables:
- preferences: persisted display preferences (see settings.models)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
