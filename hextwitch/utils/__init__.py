"""Utility package for HexTwitch.

Exposed names:
    ReadWriteLock: Shared/exclusive lock guarding per-channel state.
    format_duration: Formats time durations into human-readable strings.
    parse_count: Parses a non-negative integer tag value.
"""

from .helpers import format_duration, parse_count
from .rwlock import ReadWriteLock

__all__ = ["ReadWriteLock", "format_duration", "parse_count"]
