"""Badge rendering.

A user's badges arrive as ``class/rank`` pairs in the ``badges`` tag. Each
class maps to a single glyph; tiered classes pick the glyph by rank. Rendering
is pure, so results are memoized per exact (badges, badge-info) pair.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass

from ..constants import BADGE_CACHE_SIZE
from ..logs.logger import logger
from ..utils import ReadWriteLock
from .prediction import BELOW_LOWEST_GLYPH, PredictionBadge, highest

# Placeholder shown when no user state has been received for a channel.
NO_BADGES = "_ "
UNKNOWN_GLYPH = "?"

BITS: tuple[tuple[int, str], ...] = (
    (0, "▴"),
    (100, "⬧"),
    (1_000, "⬠"),
    (5_000, "⬡"),
    (10_000, "🟋"),
    (100_000, "🟎"),
)

SUBS: tuple[tuple[int, str], ...] = (
    (0, "①"),
    (3, "③"),
    (6, "⑥"),
    (9, "⑨"),
    (12, "ⅰ"),
    (24, "ⅱ"),
    (36, "ⅲ"),
    (48, "ⅳ"),
    (60, "ⅴ"),
    (72, "ⅵ"),
    (84, "ⅶ"),
    (96, "ⅷ"),
    (108, "ⅸ"),
    (120, "ⅹ"),
    (132, "ⅺ"),
    (144, "ⅻ"),
)

FIXED_GLYPHS: dict[str, str] = {
    "broadcaster": "🜲",
    "staff": "🜨",
    "admin": "🜶",
    "moderator": "🗡",
    "vip": "⚑",
    "founder": "ⲷ",
    "sub-gift-leader": "☝",
    "sub-gifter": ":",
    "bits-charity": "🔁",
    "bits-leader": "▝",
    "hype-train": ".",
    "partner": "✓",
    "turbo": "+",
    "premium": "±",
    "glhf-pledge": "~",
    "anonymous-cheerer": "*",
    "ambassador": "a",
    "glitchcon2020": "g",
}

PREFIX_GLYPHS: tuple[tuple[str, str], ...] = (
    ("twitchcon", "c"),
    ("overwatch-league-insider", "w"),
)
GAME_GLYPH = "G"


def is_game_badge(badge_class: str) -> bool:
    """Game badges end in ``_<digits>``; there are too many to list."""
    _, sep, tail = badge_class.rpartition("_")
    return bool(sep) and tail.isdigit()


def _rank(rank: str) -> int:
    try:
        return int(rank)
    except ValueError:
        return 0


class UnknownBadges:
    """Process-wide record of badge classes with no glyph."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._seen: set[str] = set()

    def add(self, badge_class: str) -> bool:
        """Record a class; returns True the first time it is seen."""
        with self._lock.read():
            if badge_class in self._seen:
                return False
        with self._lock.write():
            if badge_class in self._seen:
                return False
            self._seen.add(badge_class)
        logger.log_event("badges", "unknown_class", badge_class=badge_class)
        return True

    def sorted(self) -> list[str]:
        with self._lock.read():
            return sorted(self._seen)

    def __contains__(self, badge_class: object) -> bool:
        with self._lock.read():
            return badge_class in self._seen

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._seen)


def badge_glyph(badge_class: str, rank: str, unknown: UnknownBadges) -> str:
    """Return the glyph for one ``class/rank`` pair."""
    if badge_class == "subscriber":
        return highest(_rank(rank), SUBS)
    if badge_class == "bits":
        return highest(_rank(rank), BITS)
    if badge_class == "predictions":
        badge = PredictionBadge.parse(rank)
        return badge.glyph if badge is not None else BELOW_LOWEST_GLYPH
    glyph = FIXED_GLYPHS.get(badge_class)
    if glyph is not None:
        return glyph
    for prefix, prefix_glyph in PREFIX_GLYPHS:
        if badge_class.startswith(prefix):
            return prefix_glyph
    if is_game_badge(badge_class):
        return GAME_GLYPH
    unknown.add(badge_class)
    return UNKNOWN_GLYPH


def _subscriber_rank(badge_info: str) -> str | None:
    for pair in badge_info.split(","):
        badge_class, _, rank = pair.partition("/")
        if badge_class == "subscriber":
            return rank
    return None


@dataclass(frozen=True, slots=True)
class Badges:
    """Raw badge tags and their rendering.

    ``output`` is None when no pair produced a glyph, otherwise the glyphs
    followed by a single space.
    """

    badges: str
    badge_info: str
    output: str | None

    def text(self) -> str:
        return self.output or ""


def render_badges(badges: str, badge_info: str, unknown: UnknownBadges) -> Badges:
    """Render a ``badges`` tag.

    The month count of a subscription lives in ``badge-info``; the rank in
    ``badges`` is only accurate when the channel has an icon for that tier.
    """
    glyphs: list[str] = []
    if badges:
        info_rank = _subscriber_rank(badge_info) if badge_info else None
        for pair in badges.split(","):
            badge_class, _, rank = pair.partition("/")
            if not badge_class:
                continue
            if badge_class == "subscriber" and info_rank is not None:
                rank = info_rank
            glyphs.append(badge_glyph(badge_class, rank, unknown))
    output = "".join(glyphs) + " " if glyphs else None
    return Badges(badges, badge_info, output)


class BadgeParseCache:
    """Bounded LRU memo over :func:`render_badges`.

    Lookups take the shared lock; refreshing recency and inserting take the
    exclusive lock.
    """

    def __init__(
        self, unknown: UnknownBadges | None = None, max_size: int = BADGE_CACHE_SIZE
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be positive")
        self.unknown = unknown if unknown is not None else UnknownBadges()
        self._max_size = max_size
        self._lock = ReadWriteLock()
        self._entries: OrderedDict[tuple[str, str], Badges] = OrderedDict()

    def render(self, badges: str, badge_info: str) -> Badges:
        key = (badges, badge_info)
        with self._lock.read():
            cached = self._entries.get(key)
        if cached is not None:
            with self._lock.write():
                if key in self._entries:
                    self._entries.move_to_end(key)
            return cached

        result = render_badges(badges, badge_info, self.unknown)
        evicted = False
        with self._lock.write():
            if key not in self._entries and len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
                evicted = True
            self._entries[key] = result
            self._entries.move_to_end(key)
        if evicted:
            logger.log_event("badges", "cache_evict", logging.DEBUG, size=self._max_size)
        return result

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries
