"""Output helpers: print an event through the host, then color the tab."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from .tabs import TabColor, TabSeverityTracker

if TYPE_CHECKING:  # pragma: no cover
    from ..host import Host


class PrintEvent(Enum):
    """Host print event categories, valued by the host's event names."""

    # Channel events: subscriptions, highlighted messages, etc.
    ALERT = "WhoIs Server Line"
    # Links to other channels, like hosting.
    CHANNEL = "Channel Url"
    # Red "error" text: things going wrong, or people being banned.
    ERROR = "Server Error"
    NORMAL = "Motd"
    # Bits and custom channel point rewards.
    REWARD = "WhoIs Authenticated"

    CHANNEL_MESSAGE = "Channel Message"
    CHANNEL_ACTION = "Channel Action"
    CHANNEL_MSG_HILIGHT = "Channel Msg Hilight"
    PRIVATE_MESSAGE = "Private Message"
    PRIVATE_ACTION = "Private Action"


class Output:
    def __init__(self, host: Host, tabs: TabSeverityTracker) -> None:
        self.host = host
        self.tabs = tabs

    def echo(
        self,
        channel: str,
        event: PrintEvent,
        fields: Sequence[str],
        severity: TabColor = TabColor.MESSAGE,
    ) -> None:
        self.host.print_event(channel, event, list(fields))
        self.tabs.escalate(channel, severity)

    def alert_basic(self, channel: str, message: str) -> None:
        self.echo(channel, PrintEvent.NORMAL, [message], TabColor.EVENT)

    def alert_error(self, channel: str, message: str) -> None:
        self.echo(channel, PrintEvent.ERROR, [message], TabColor.EVENT)

    def alert_subscription(self, channel: str, message: str) -> None:
        self.echo(channel, PrintEvent.ALERT, ["SUBSCRIPTION", message], TabColor.MESSAGE)

    def alert_sub_upgrade(self, channel: str, message: str) -> None:
        self.echo(channel, PrintEvent.ALERT, ["UPGRADE", message], TabColor.MESSAGE)

    def cheer(self, channel: str, name: str, bits: int) -> None:
        if bits <= 0:
            return
        self.echo(
            channel,
            PrintEvent.REWARD,
            ["CHEER", f"{name} cheers", f"{bits} bit{'' if bits == 1 else 's'}"],
            TabColor.EVENT,
        )
