"""Owned per-process state: one instance of every stateful component.

Everything the dispatcher mutates lives here, so tests build a fresh
ChannelState per case instead of sharing globals.
"""

from __future__ import annotations

from .host import Host
from .output import (
    BadgeParseCache,
    Badges,
    Output,
    PredictionTracker,
    PredictUpdate,
    RoomState,
    RoomStateReport,
    RoomStateTracker,
    TabSeverityTracker,
    UnknownBadges,
    UserBadgeCache,
)
from .output.tabs import TabColor


class ChannelState:
    def __init__(self, host: Host, badge_cache_size: int | None = None) -> None:
        self.host = host
        self.unknown = UnknownBadges()
        if badge_cache_size is None:
            self.badge_cache = BadgeParseCache(self.unknown)
        else:
            self.badge_cache = BadgeParseCache(self.unknown, badge_cache_size)
        self.userstate = UserBadgeCache(self.badge_cache)
        self.predictions = PredictionTracker()
        self.rooms = RoomStateTracker()
        self.tabs = TabSeverityTracker(host)
        self.output = Output(host, self.tabs)

    # Badges

    def render_badges(self, badges: str, badge_info: str = "") -> Badges:
        return self.badge_cache.render(badges, badge_info)

    def set_user_badges(
        self, channel: str, badges: str, badge_info: str
    ) -> Badges | None:
        return self.userstate.set(channel, badges, badge_info)

    def user_badges(self, channel: str) -> str:
        return self.userstate.get(channel)

    def unknown_badges(self) -> list[str]:
        return self.unknown.sorted()

    # Predictions

    def observe_prediction(
        self, channel: str, badge_raw: str, label: str, debug: bool = False
    ) -> PredictUpdate:
        return self.predictions.observe(channel, badge_raw, label, debug)

    def prediction_report(self, channel: str) -> str:
        return self.predictions.report(channel)

    # Room state

    def update_room_state(
        self, channel: str, tags: list[tuple[str, str]]
    ) -> RoomStateReport:
        return self.rooms.apply(channel, tags)

    def room_state(self, channel: str) -> RoomState:
        return self.rooms.get(channel)

    # Tabs

    def escalate(self, channel: str, color: TabColor) -> bool:
        return self.tabs.escalate(channel, color)

    def focus(self, channel: str) -> None:
        self.tabs.reset(channel)
