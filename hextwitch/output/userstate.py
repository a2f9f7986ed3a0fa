"""Per-channel cache of the local user's badges."""

from __future__ import annotations

from ..utils import ReadWriteLock
from .badges import NO_BADGES, BadgeParseCache, Badges


class UserBadgeCache:
    """Last badges received for the local user in each channel.

    ``set`` only re-renders, and only reports, when the raw tags differ from
    what is stored, so repeated USERSTATE echoes cause no UI churn.
    """

    def __init__(self, parser: BadgeParseCache) -> None:
        self._parser = parser
        self._lock = ReadWriteLock()
        self._channels: dict[str, Badges] = {}

    def set(self, channel: str, badges: str, badge_info: str) -> Badges | None:
        with self._lock.read():
            current = self._channels.get(channel)
        if (
            current is not None
            and current.badges == badges
            and current.badge_info == badge_info
        ):
            return None

        rendered = self._parser.render(badges, badge_info)
        with self._lock.write():
            current = self._channels.get(channel)
            if (
                current is not None
                and current.badges == badges
                and current.badge_info == badge_info
            ):
                return None
            self._channels[channel] = rendered
        return rendered

    def get(self, channel: str) -> str:
        """Rendered glyphs for ``channel``, or the no-state placeholder."""
        with self._lock.read():
            current = self._channels.get(channel)
        if current is None:
            return NO_BADGES
        return current.text()

    def has(self, channel: str) -> bool:
        with self._lock.read():
            return channel in self._channels
