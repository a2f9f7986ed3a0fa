"""Tests for logging_config.py module."""

import io
import logging

import colorlog
import pytest

from hextwitch.logging_config import (
    ErrorAggregator,
    LoggerConfigurator,
    debug_enabled,
    error_aggregator,
    log_structured_error,
)


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestLoggerConfigurator:
    def test_formatter_is_colorlog(self):
        assert isinstance(LoggerConfigurator().build_formatter(), colorlog.ColoredFormatter)

    def test_configure_sets_single_handler(self, restore_root, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        stream = io.StringIO()
        LoggerConfigurator({"stream": stream}).configure()
        assert len(restore_root.handlers) == 1
        assert restore_root.level == logging.INFO
        logging.getLogger("hextwitch.sample").warning("visible")
        assert "visible" in stream.getvalue()

    def test_configure_debug(self, restore_root, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        LoggerConfigurator({"stream": io.StringIO()}).configure()
        assert restore_root.level == logging.DEBUG


@pytest.mark.parametrize("value, expected", [("true", True), ("YES", True), ("0", False), ("", False)])
def test_debug_enabled(monkeypatch, value, expected):
    monkeypatch.setenv("DEBUG", value)
    assert debug_enabled() is expected


class TestErrorAggregator:
    def test_summary_counts(self):
        agg = ErrorAggregator()
        agg.record_error("network", "down")
        agg.record_error("network", "still down", {"attempt": 2})
        summary = agg.get_error_summary()
        assert summary["network"]["total_count"] == 2
        assert summary["network"]["recent_count"] == 2
        assert summary["network"]["last_occurrence"]["context"] == {"attempt": 2}

    def test_should_alert(self):
        agg = ErrorAggregator()
        assert not agg.should_alert("auth")
        for _ in range(11):
            agg.record_error("auth", "rejected")
        assert agg.should_alert("auth")

    def test_clear(self):
        agg = ErrorAggregator()
        agg.record_error("parsing", "bad")
        agg.clear()
        assert agg.get_error_summary() == {}


def test_log_structured_error(caplog):
    error_aggregator.clear()
    with caplog.at_level(logging.ERROR):
        log_structured_error("parsing", "bad body", ValueError("x"), {"key": "k"})
    assert "[PARSING] bad body | Exception: ValueError: x | Context: key=k" in caplog.text
    assert error_aggregator.get_error_summary()["parsing"]["total_count"] == 1
    error_aggregator.clear()
