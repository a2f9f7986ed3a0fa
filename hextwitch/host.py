"""Boundary to the chat client hosting the plugin.

The plugin never talks to a UI directly: it prints events, runs client
commands and asks which tab has focus, all through this protocol.
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

from .output.printing import PrintEvent

logger = logging.getLogger(__name__)


class Host(Protocol):
    """Protocol for the hosting chat client."""

    def print_event(self, channel: str, event: PrintEvent, fields: list[str]) -> None:
        """Print an event with its ordered fields into a channel tab."""
        ...

    def command(self, text: str) -> None:
        """Execute a client command such as ``GUI COLOR 2``."""
        ...

    def is_focused(self, channel: str) -> bool:
        """Check whether the channel's tab is the one the user is looking at."""
        ...


class ConsoleHost:
    """Host that writes events as plain lines to a stream.

    Commands are recorded rather than executed. ``focused`` names the tab
    treated as focused; by default no tab is.
    """

    def __init__(self, stream: TextIO | None = None, focused: str | None = None) -> None:
        self.stream = stream or sys.stdout
        self.focused = focused
        self.commands: list[str] = []

    def print_event(self, channel: str, event: PrintEvent, fields: list[str]) -> None:
        text = " ".join(f for f in fields if f)
        print(f"{channel or '*'} [{event.name}] {text}", file=self.stream)

    def command(self, text: str) -> None:
        logger.debug("host command: %s", text)
        self.commands.append(text)

    def is_focused(self, channel: str) -> bool:
        return self.focused is not None and channel == self.focused
