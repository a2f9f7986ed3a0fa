"""Command line runner: feed raw server lines through the dispatcher.

Usage: ``python main.py [FILE]`` or ``python -m hextwitch [FILE]``; lines are
read from stdin when no file is given. ``--health-check`` validates the
configuration and exits.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from pydantic import ValidationError

from .auth import ApiHandler
from .channel_state import ChannelState
from .config import PreferenceStore
from .errors import log_error
from .events import ServerEventDispatcher
from .host import ConsoleHost
from .logging_config import LoggerConfigurator, error_aggregator
from .logs.logger import logger


def run_lines(
    lines: Iterable[str],
    dispatcher: ServerEventDispatcher,
    api: ApiHandler | None = None,
) -> int:
    """Dispatch every non-blank line; returns the number dispatched."""
    count = 0
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        if api is not None and api.is_waiting:
            # Non-blocking poll of the authorization job.
            api.validate()
        dispatcher.handle_line(line)
        count += 1
    return count


def health_check() -> int:
    try:
        store = PreferenceStore.from_env()
    except ValidationError as e:
        logger.log_event("app", "health_check_failed", logging.ERROR, error=e)
        return 1
    logger.log_event("app", "health_check_ok", debug=store.debug)
    return 0


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    LoggerConfigurator().configure()

    if args and args[0] == "--health-check":
        return health_check()

    try:
        store = PreferenceStore.from_env()
    except ValidationError as e:
        log_error("Invalid preferences", e)
        return 1

    host = ConsoleHost()
    state = ChannelState(host)
    dispatcher = ServerEventDispatcher(state, store)
    api = ApiHandler(store) if store.get_token() else None
    if api is not None:
        api.validate()
    logger.log_event("app", "start", debug=store.debug)

    lines = 0
    try:
        if args:
            with open(args[0], encoding="utf-8") as f:
                lines = run_lines(f, dispatcher, api)
        else:
            lines = run_lines(stdin or sys.stdin, dispatcher, api)
    except OSError as e:
        log_error("Cannot read input", e, {"path": args[0] if args else "<stdin>"})
        return 1
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", logging.WARNING)
    finally:
        if api is not None:
            api.shutdown()
        if store.debug:
            error_aggregator.log_summary_report()
        logger.log_event("app", "stop", lines=lines)
    return 0
