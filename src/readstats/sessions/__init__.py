"""Normalized reading sessions."""

from .extractor import NormalizedSession, extract_sessions
from .range_filter import filter_sessions, range_start_ms

__all__ = [
    "NormalizedSession",
    "extract_sessions",
    "filter_sessions",
    "range_start_ms",
]
