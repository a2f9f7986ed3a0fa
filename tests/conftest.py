from __future__ import annotations

import os

import pytest

# Keep retry backoff out of test wall time.
os.environ.setdefault("RETRY_MAX_BACKOFF_SECONDS", "0")

from hextwitch.channel_state import ChannelState  # noqa: E402
from hextwitch.config import Preferences, PreferenceStore  # noqa: E402
from hextwitch.events import ServerEventDispatcher  # noqa: E402


class RecordingHost:
    """Host double that records everything the plugin asks of it."""

    def __init__(self, focused: set[str] | None = None) -> None:
        self.focused = focused or set()
        self.printed: list[tuple[str, object, list[str]]] = []
        self.commands: list[str] = []

    def print_event(self, channel, event, fields):  # type: ignore[no-untyped-def]
        self.printed.append((channel, event, list(fields)))

    def command(self, text: str) -> None:
        self.commands.append(text)

    def is_focused(self, channel: str) -> bool:
        return channel in self.focused

    def texts(self) -> list[str]:
        return [" ".join(fields) for _, _, fields in self.printed]


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def state(host: RecordingHost) -> ChannelState:
    return ChannelState(host)


@pytest.fixture
def prefs() -> PreferenceStore:
    return PreferenceStore(Preferences())


@pytest.fixture
def dispatcher(state: ChannelState, prefs: PreferenceStore) -> ServerEventDispatcher:
    return ServerEventDispatcher(state, prefs)
