"""Project logging package.

Contains the event template catalog and the EventLogger used across the
plugin. Avoid importing stdlib logging through this package name externally.
"""

from .event_catalog import (  # noqa: F401
    EVENT_TEMPLATES,
    missing_templates,
    reload_event_templates,
)
from .logger import EventLogger, logger  # noqa: F401

__all__ = [
    "EventLogger",
    "logger",
    "EVENT_TEMPLATES",
    "missing_templates",
    "reload_event_templates",
]
