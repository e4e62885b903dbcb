"""Configuration management for readstats.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_WEEKLY_GOAL_SECONDS = 5 * 60 * 60
DEFAULT_RECOMPUTE_DELAY = 0.2


@dataclass
class Config:
    """Application configuration."""

    # Database holding persisted preferences
    db_path: Path

    # Viewer time zone (IANA name); None means the system local zone
    timezone: Optional[str]

    # Dashboard
    weekly_goal_seconds: int
    recompute_delay: float  # seconds

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "READSTATS_DB_PATH",
            str(Path.home() / ".readstats" / "readstats.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            timezone=os.environ.get("READSTATS_TIMEZONE") or None,
            weekly_goal_seconds=int(
                os.environ.get(
                    "READSTATS_WEEKLY_GOAL_SECONDS", str(DEFAULT_WEEKLY_GOAL_SECONDS)
                )
            ),
            recompute_delay=float(
                os.environ.get("READSTATS_RECOMPUTE_DELAY", str(DEFAULT_RECOMPUTE_DELAY))
            ),
            log_level=os.environ.get("READSTATS_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(f"Unknown time zone: {self.timezone}")

        if self.weekly_goal_seconds <= 0:
            errors.append("Weekly goal must be a positive number of seconds")

        if self.recompute_delay < 0:
            errors.append("Recompute delay cannot be negative")

        return errors

    def tzinfo(self) -> Optional[tzinfo]:
        """Resolve the configured time zone, None for the system zone."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return None


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
