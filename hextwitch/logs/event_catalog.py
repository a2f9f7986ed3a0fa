"""Message templates for log events, keyed by ``(domain, action)``.

Templates live in ``event_templates.json`` next to this module, one object per
domain. Every ``log_event`` call in the package names a pair from this file;
``missing_templates`` reports the pairs a set of calls would leave without a
message.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from string import Formatter
from typing import Any

EventKey = tuple[str, str]

LOAD_ERROR: EventKey = ("app", "load_error")

EVENT_TEMPLATES: dict[EventKey, str] = {}
_JSON_FILENAME = "event_templates.json"


def _entries(raw: Any) -> Iterator[tuple[EventKey, str]]:
    # Entries that are not string -> {string: string} are ignored.
    if not isinstance(raw, Mapping):
        return
    for domain, actions in raw.items():
        if not isinstance(domain, str) or not isinstance(actions, Mapping):
            continue
        for action, template in actions.items():
            if isinstance(action, str) and isinstance(template, str):
                yield (domain, action), template


def _load_event_templates(path: Path | None = None) -> dict[EventKey, str]:
    """Read the catalog at ``path`` (the bundled file by default).

    A missing or malformed file yields only a ``LOAD_ERROR`` entry; the logger
    then falls back to messages derived from the event name.
    """
    path = path or Path(__file__).with_name(_JSON_FILENAME)
    try:
        with path.open("r", encoding="utf-8") as f:
            return dict(_entries(json.load(f)))
    except FileNotFoundError:
        return {LOAD_ERROR: "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {LOAD_ERROR: f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


def template_fields(template: str) -> set[str]:
    """Names the template substitutes, e.g. ``{"old", "new"}``."""
    return {name for _, name, _, _ in Formatter().parse(template) if name}


def render(domain: str, action: str, fields: Mapping[str, object]) -> str | None:
    """The event's message, or None when the catalog has no template for it.

    A template whose fields are not all supplied is returned unformatted.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return None
    try:
        return template.format(**fields)
    except (KeyError, IndexError, ValueError):
        return template


def missing_templates(events: Iterable[EventKey]) -> list[EventKey]:
    """The pairs in ``events`` that have no template, sorted."""
    return sorted(set(events) - EVENT_TEMPLATES.keys())


reload_event_templates()

__all__ = [
    "EVENT_TEMPLATES",
    "EventKey",
    "LOAD_ERROR",
    "missing_templates",
    "reload_event_templates",
    "render",
    "template_fields",
]
