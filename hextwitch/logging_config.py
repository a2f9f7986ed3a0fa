r"""
Logging configuration module for HexTwitch.

Sets up colorlog on the root logger and keeps a small in-memory record of
structured errors so a session can end with a per-category summary.
"""

import logging
import os
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any

import colorlog

ERROR_HISTORY_PER_TYPE = 1000
RECENT_WINDOW_SECONDS = 3600


@dataclass
class ErrorRecord:
    timestamp: float
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class ErrorAggregator:
    """Per-category error history with rate reporting.

    The dispatch thread and the authorization worker both record here.
    """

    def __init__(self, history: int = ERROR_HISTORY_PER_TYPE):
        self._history = history
        self._records: dict[str, deque[ErrorRecord]] = {}
        self._lock = threading.Lock()
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        record = ErrorRecord(time.time(), message, dict(context or {}))
        with self._lock:
            bucket = self._records.setdefault(
                error_type, deque(maxlen=self._history)
            )
            bucket.append(record)

    def get_error_summary(self) -> dict[str, Any]:
        """Counts per category: total, within the last hour, and hourly rate.

        The rate is averaged over at least one hour so a burst right after
        start does not read as a spike.
        """
        now = time.time()
        with self._lock:
            hours = max((now - self.start_time) / 3600, 1)
            summary: dict[str, Any] = {}
            for error_type, bucket in self._records.items():
                last = bucket[-1] if bucket else None
                summary[error_type] = {
                    "total_count": len(bucket),
                    "recent_count": sum(
                        1 for r in bucket if now - r.timestamp < RECENT_WINDOW_SECONDS
                    ),
                    "rate_per_hour": len(bucket) / hours,
                    "last_occurrence": (
                        {"message": last.message, "context": last.context}
                        if last
                        else None
                    ),
                }
            return summary

    def should_alert(self, error_type: str, threshold_rate: float = 10.0) -> bool:
        stats = self.get_error_summary().get(error_type)
        return stats is not None and stats["rate_per_hour"] > threshold_rate

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return
        logging.warning("Error summary:")
        for error_type, stats in sorted(summary.items()):
            logging.warning(
                "  %s: %d total, %d in last hour, %.1f/hour",
                error_type,
                stats["total_count"],
                stats["recent_count"],
                stats["rate_per_hour"],
            )
            if stats["last_occurrence"]:
                logging.warning("    Last: %s", stats["last_occurrence"]["message"])

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self.start_time = time.time()


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``message`` tagged with its category and record it for the summary.

    Args:
        error_type: Category such as 'network', 'auth' or 'parsing'.
        message: Descriptive error message.
        exception: The exception that occurred, if any.
        context: Extra key/value pairs appended to the line.
        level: Logging level (default: ERROR).
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))

    error_aggregator.record_error(error_type, message, context)
    if error_aggregator.should_alert(error_type):
        rate = error_aggregator.get_error_summary()[error_type]["rate_per_hour"]
        logging.critical("High error rate: %s at %.1f/hour", error_type, rate)


def debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class LoggerConfigurator:
    """Root logger setup with colorlog.

    ``DEBUG`` in the environment ('true', '1' or 'yes') selects DEBUG level,
    otherwise INFO.
    """

    def __init__(self, config=None):
        # ``stream`` selects the output stream; stderr by default.
        self.config = config or {}

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s "
            "%(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )

    def configure(self) -> logging.Logger:
        handler = logging.StreamHandler(self.config.get("stream", sys.stderr))
        handler.setFormatter(self.build_formatter())

        root_logger = logging.getLogger()
        for existing in list(root_logger.handlers):
            root_logger.removeHandler(existing)
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)

        # aiohttp is chatty at DEBUG during token validation
        logging.getLogger("aiohttp").setLevel(logging.INFO)
        return root_logger
