"""Tab severity: how loudly an unfocused tab should be colored."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from ..utils import ReadWriteLock

if TYPE_CHECKING:  # pragma: no cover
    from ..host import Host


class TabColor(IntEnum):
    NONE = 0
    EVENT = 1
    MESSAGE = 2
    HIGHLIGHT = 3


class TabSeverityTracker:
    """Highest severity seen per channel since the tab was last focused.

    Only a strict increase reaches the host, so repeated events of the same
    severity cost nothing.
    """

    def __init__(self, host: Host) -> None:
        self._host = host
        self._lock = ReadWriteLock()
        self._colors: dict[str, TabColor] = {}

    def escalate(self, channel: str, color: TabColor) -> bool:
        """Raise the channel's severity; returns True if the host was told."""
        if self._host.is_focused(channel):
            return False
        color = TabColor(color)
        with self._lock.read():
            current = self._colors.get(channel)
        if current is not None and color <= current:
            return False
        with self._lock.write():
            current = self._colors.get(channel)
            if current is not None and color <= current:
                return False
            self._colors[channel] = color
        self._host.command(f"GUI COLOR {int(color)}")
        return True

    def reset(self, channel: str) -> None:
        """Drop the channel back to no severity, as when its tab gains focus."""
        with self._lock.write():
            self._colors[channel] = TabColor.NONE
        self._host.command(f"GUI COLOR {int(TabColor.NONE)}")

    def get(self, channel: str) -> TabColor | None:
        with self._lock.read():
            return self._colors.get(channel)
