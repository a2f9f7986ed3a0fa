"""Prediction tracking.

Twitch labels prediction outcomes with ``predictions/<variant>`` badges such
as ``blue-1`` or ``gray-2`` and carries the outcome name in ``badge-info``.
Channels use one of a few fixed layouts, which have to be inferred from the
badges seen so far.
"""

from __future__ import annotations

import bisect
import copy
import logging
from dataclasses import dataclass, field
from enum import Enum, Flag, IntEnum

from ..logs.logger import logger
from ..utils import ReadWriteLock


class PredictVariant(IntEnum):
    BLUE = 0
    PINK = 1
    GRAY = 2


# Per-variant (threshold, glyph) tables; the rank picks the highest threshold
# not above it.
PREDICTION_GLYPHS: dict[PredictVariant, tuple[tuple[int, str], ...]] = {
    PredictVariant.BLUE: ((1, "⧮"),),
    PredictVariant.PINK: ((1, "⧯"),),
    PredictVariant.GRAY: ((1, "⧲"), (2, "⧳")),
}
BELOW_LOWEST_GLYPH = "¿"


def highest(rank: int, table: tuple[tuple[int, str], ...]) -> str:
    """Glyph of the last entry whose threshold is at most ``rank``."""
    idx = bisect.bisect_right(table, rank, key=lambda entry: entry[0])
    return table[idx - 1][1] if idx else BELOW_LOWEST_GLYPH


@dataclass(frozen=True, order=True, slots=True)
class PredictionBadge:
    variant: PredictVariant
    rank: int

    @classmethod
    def parse(cls, raw: str) -> PredictionBadge | None:
        """Parse ``<variant>-<rank>``; anything else yields None."""
        name, sep, rank_str = raw.strip().lower().rpartition("-")
        if not sep:
            return None
        try:
            variant = PredictVariant[name.upper()]
            rank = int(rank_str)
        except (KeyError, ValueError):
            return None
        if rank < 1:
            return None
        return cls(variant, rank)

    @property
    def glyph(self) -> str:
        return highest(self.rank, PREDICTION_GLYPHS[self.variant])

    def __str__(self) -> str:
        return f"{self.variant.name.lower()}-{self.rank}"


class PredictMode(Enum):
    BLUE10 = "blue10"
    BLUE_PINK = "bluepink"
    GRAY2 = "gray2"
    UNKNOWN = "unknown"

    def accepts(self, badge: PredictionBadge) -> bool:
        match self:
            case PredictMode.BLUE10:
                return badge.variant is PredictVariant.BLUE and 1 <= badge.rank <= 10
            case PredictMode.BLUE_PINK:
                return (badge.variant, badge.rank) in (
                    (PredictVariant.BLUE, 1),
                    (PredictVariant.PINK, 2),
                )
            case PredictMode.GRAY2:
                return badge.variant is PredictVariant.GRAY and badge.rank in (1, 2)
            case _:
                return True

    @property
    def desc(self) -> str:
        return _MODE_DESCRIPTIONS[self]

    @staticmethod
    def guess(badge: PredictionBadge) -> PredictMode | None:
        """Infer the layout a badge belongs to, if it is unambiguous."""
        match badge.variant:
            case PredictVariant.BLUE if badge.rank == 1:
                # Shared by the two-outcome and ten-outcome layouts.
                return None
            case PredictVariant.BLUE:
                return PredictMode.BLUE10
            case PredictVariant.PINK if badge.rank == 2:
                return PredictMode.BLUE_PINK
            case PredictVariant.GRAY:
                return PredictMode.GRAY2
            case _:
                return None


_MODE_DESCRIPTIONS = {
    PredictMode.BLUE10: "Blue, up to 10 outcomes",
    PredictMode.BLUE_PINK: "Blue/Pink",
    PredictMode.GRAY2: "Gray, 2 outcomes",
    PredictMode.UNKNOWN: "Unknown layout",
}


class PredictUpdate(Flag):
    NONE = 0
    LABEL = 1
    MODE = 2
    BOTH = LABEL | MODE


@dataclass
class Predict:
    """Outcome labels seen in one channel plus the layout currently assumed.

    Labels for badges outside the current layout are kept but not displayed.
    """

    labels: dict[PredictionBadge, str] = field(default_factory=dict)
    mode: PredictMode = PredictMode.BLUE10

    def observe(
        self, badge: PredictionBadge, label: str, debug: bool = False
    ) -> PredictUpdate:
        update = PredictUpdate.NONE
        if not self.mode.accepts(badge):
            guessed = PredictMode.guess(badge)
            if guessed is None and debug:
                guessed = PredictMode.UNKNOWN
            # Without a guess and outside debug mode the layout stays as is.
            if guessed is not None and guessed is not self.mode:
                self.mode = guessed
                update |= PredictUpdate.MODE
        if self.labels.get(badge) != label:
            self.labels[badge] = label
            update |= PredictUpdate.LABEL
        return update

    def pairs(self) -> list[tuple[PredictionBadge, str]]:
        return sorted(
            (badge, label)
            for badge, label in self.labels.items()
            if self.mode.accepts(badge)
        )

    def is_empty(self) -> bool:
        return not self.labels

    def _icon(self, badge: PredictionBadge) -> str:
        if self.mode is PredictMode.BLUE10:
            return f"{badge.glyph}{badge.rank}"
        return badge.glyph

    def display(self) -> str:
        items = [f'"{label}" ({self._icon(badge)})' for badge, label in self.pairs()]
        if not items:
            return "Unknown"
        if len(items) == 1:
            return items[0]
        if len(items) == 2:
            return f"{items[0]} or {items[1]}"
        return ", ".join(items[:-1]) + f", or {items[-1]}"

    def __str__(self) -> str:
        return self.display()


class PredictionTracker:
    """Per-channel Predict records behind a reader/writer lock."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._channels: dict[str, Predict] = {}

    def observe(
        self, channel: str, badge_raw: str, label: str, debug: bool = False
    ) -> PredictUpdate:
        badge = PredictionBadge.parse(badge_raw)
        if badge is None:
            logger.log_event(
                "prediction", "bad_badge", logging.DEBUG, channel=channel, badge=badge_raw
            )
            return PredictUpdate.NONE
        with self._lock.write():
            predict = self._channels.setdefault(channel, Predict())
            old_mode = predict.mode
            update = predict.observe(badge, label, debug)
            new_mode = predict.mode
        if PredictUpdate.MODE in update:
            logger.log_event(
                "prediction",
                "mode_change",
                channel=channel,
                old=old_mode.desc,
                new=new_mode.desc,
            )
        if PredictUpdate.LABEL in update:
            logger.log_event(
                "prediction",
                "label",
                logging.DEBUG,
                channel=channel,
                badge=str(badge),
                label=label,
            )
        return update

    def get(self, channel: str) -> Predict | None:
        with self._lock.read():
            predict = self._channels.get(channel)
            return copy.deepcopy(predict) if predict is not None else None

    def report(self, channel: str) -> str:
        predict = self.get(channel)
        if predict is None or predict.is_empty():
            return "No active Prediction."
        return f"Current Prediction ({predict.mode.desc}): {predict.display()}"

    def clear(self, channel: str) -> None:
        with self._lock.write():
            self._channels.pop(channel, None)
