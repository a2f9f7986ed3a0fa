"""Tests for template lookup and catalog coverage of logged events."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from hextwitch.logs import event_catalog

PACKAGE = Path(event_catalog.__file__).resolve().parents[1]
LOG_EVENT_CALL = re.compile(r'log_event\(\s*"(\w+)",\s*"(\w+)"')


def logged_events() -> set[tuple[str, str]]:
    events: set[tuple[str, str]] = set()
    for source in PACKAGE.rglob("*.py"):
        events.update(LOG_EVENT_CALL.findall(source.read_text(encoding="utf-8")))
    return events


def test_every_logged_event_has_a_template():
    events = logged_events()
    assert ("dispatch", "line") in events
    assert event_catalog.missing_templates(events) == []


def test_missing_templates_sorted_without_duplicates():
    events = [("zz", "b"), ("auth", "validate_ok"), ("zz", "a"), ("zz", "b")]
    assert event_catalog.missing_templates(events) == [("zz", "a"), ("zz", "b")]


def test_render_formats_fields():
    text = event_catalog.render("config", "toggle", {"name": "announce", "value": True})
    assert text == "Preference 'announce' set to True"


def test_render_unknown_event_is_none():
    assert event_catalog.render("made_up", "x", {}) is None


def test_render_without_fields_returns_template():
    assert event_catalog.render("auth", "wait_timeout", {}) == (
        "Authorization wait timed out after {seconds}s"
    )


@pytest.mark.parametrize(
    "template, fields",
    [
        ("Prediction mode {old} -> {new}", {"old", "new"}),
        ("Configuration OK", set()),
        ("{a}{a} {b!r:>5}", {"a", "b"}),
    ],
)
def test_template_fields(template, fields):
    assert event_catalog.template_fields(template) == fields


def test_shipped_templates_use_keyword_fields():
    for key, template in event_catalog.EVENT_TEMPLATES.items():
        for name in event_catalog.template_fields(template):
            assert name.isidentifier(), key
