"""readstats: reading-session analytics for a reading statistics dashboard."""

__version__ = "0.1.0"
