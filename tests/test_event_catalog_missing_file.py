from __future__ import annotations

from pathlib import Path

from hextwitch.logs import event_catalog


def test_missing_file_leaves_load_error(tmp_path: Path) -> None:
    templates = event_catalog._load_event_templates(tmp_path / "absent.json")
    assert templates == {event_catalog.LOAD_ERROR: "Event templates file missing"}


def test_malformed_file_leaves_load_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    templates = event_catalog._load_event_templates(path)
    assert list(templates) == [("app", "load_error")]
    assert templates[("app", "load_error")].startswith("Failed to load event templates")


def test_non_string_entries_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "mixed.json"
    path.write_text('{"a": {"ok": "fine", "bad": 3}, "b": []}', encoding="utf-8")
    assert event_catalog._load_event_templates(path) == {("a", "ok"): "fine"}


def test_shipped_catalog_covers_logged_events() -> None:
    templates = event_catalog._load_event_templates()
    for key in [
        ("badges", "unknown_class"),
        ("roomstate", "unknown_key"),
        ("prediction", "mode_change"),
        ("auth", "validate_ok"),
        ("config", "reward_set"),
    ]:
        assert key in templates


def test_reload_swaps_catalog(tmp_path: Path) -> None:
    path = tmp_path / "one.json"
    path.write_text('{"x": {"y": "z"}}', encoding="utf-8")
    try:
        event_catalog.reload_event_templates(path)
        assert event_catalog.EVENT_TEMPLATES == {("x", "y"): "z"}
    finally:
        event_catalog.reload_event_templates()
    assert ("auth", "validate_ok") in event_catalog.EVENT_TEMPLATES
