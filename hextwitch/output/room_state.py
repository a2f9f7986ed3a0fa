"""Room state: per-channel chat modes driven by ROOMSTATE tags.

A ROOMSTATE carrying the full tag set arrives on join; afterwards single-tag
updates arrive whenever a moderator changes a mode. Tags outside the known
vocabulary are handed back to the caller instead of being rejected.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, TypeVar

from ..constants import ROOMSTATE_JOIN_TAG_THRESHOLD
from ..utils import ReadWriteLock

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FollowMode:
    """Followers-only setting: None minutes means off, 0 means any follower."""

    minutes: int | None = None

    OFF: ClassVar[FollowMode]
    FOLLOW_ANY: ClassVar[FollowMode]

    @classmethod
    def parse(cls, value: str) -> FollowMode:
        try:
            minutes = int(value)
        except ValueError:
            minutes = -1
        if minutes < 0:
            return cls()
        return cls(minutes)

    @classmethod
    def for_minutes(cls, minutes: int) -> FollowMode:
        return cls(minutes)

    @property
    def is_off(self) -> bool:
        return self.minutes is None

    @property
    def is_follow_any(self) -> bool:
        return self.minutes == 0

    @property
    def active(self) -> bool:
        return self.minutes is not None


FollowMode.OFF = FollowMode()
FollowMode.FOLLOW_ANY = FollowMode(0)


@dataclass(frozen=True, slots=True)
class Change(Generic[T]):
    old: T
    new: T

    @property
    def changed(self) -> bool:
        return self.old != self.new

    def __neg__(self) -> Change[T]:
        return Change(self.new, self.old)


class StateField(Enum):
    SLOW = "slow"
    UNIQUE = "r9k"
    EMOTES = "emote-only"
    FOLLOWERS = "followers-only"
    SUBSCRIBERS = "subs-only"
    RITUALS = "rituals"
    ROOM_ID = "room-id"


@dataclass(frozen=True, slots=True)
class StateChange:
    field: StateField
    change: Change

    @property
    def changed(self) -> bool:
        return self.change.changed

    @property
    def active(self) -> bool:
        """True when the new value is a mode being switched on."""
        new = self.change.new
        match self.field:
            case StateField.SLOW:
                return new is not None
            case StateField.FOLLOWERS:
                return new.active
            case StateField.RITUALS | StateField.ROOM_ID:
                return False
            case _:
                return bool(new)


def _optional_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class RoomState:
    slow: int | None = None
    unique: bool = False
    emotes: bool = False
    followers: FollowMode = FollowMode()
    subscribers: bool = False
    rituals: int | None = None
    room_id: int | None = None

    def _change(self, attr: str, field: StateField, new: object) -> StateChange:
        old = getattr(self, attr)
        setattr(self, attr, new)
        return StateChange(field, Change(old, new))

    def update(self, key: str, value: str) -> StateChange | str:
        """Apply one tag; returns the change, or the key itself if unrecognized."""
        match key:
            case "emote-only":
                return self._change("emotes", StateField.EMOTES, value != "0")
            case "r9k":
                return self._change("unique", StateField.UNIQUE, value != "0")
            case "subs-only":
                return self._change("subscribers", StateField.SUBSCRIBERS, value != "0")
            case "slow":
                seconds = _optional_int(value) or None
                if seconds is not None and seconds < 0:
                    seconds = None
                return self._change("slow", StateField.SLOW, seconds)
            case "followers-only":
                return self._change(
                    "followers", StateField.FOLLOWERS, FollowMode.parse(value)
                )
            case "rituals":
                return self._change("rituals", StateField.RITUALS, _optional_int(value))
            case "room-id":
                return self._change("room_id", StateField.ROOM_ID, _optional_int(value))
            case _:
                return key


def describe_change(change: StateChange) -> str | None:
    """Human-readable status line for a change, or None for informational fields."""
    new = change.change.new
    match change.field:
        case StateField.EMOTES:
            return f"Emotes Only mode {'enabled' if new else 'disabled'}."
        case StateField.UNIQUE:
            return f"R9K mode {'enabled' if new else 'disabled'}."
        case StateField.SUBSCRIBERS:
            return f"Subscribers Only mode {'enabled' if new else 'disabled'}."
        case StateField.SLOW:
            if new is None:
                return "Slow mode disabled."
            return f"Slow mode ({new}s) enabled."
        case StateField.FOLLOWERS:
            if new.is_off:
                return "Followers Only mode disabled."
            if new.is_follow_any:
                return "Followers Only mode enabled."
            return f"{new.minutes}-minute Followers Only mode enabled."
        case _:
            return None


@dataclass(frozen=True, slots=True)
class RoomStateReport:
    """Outcome of one ROOMSTATE batch."""

    lines: list[str]
    unknown: list[tuple[str, str]]
    join: bool


def is_join_batch(tag_count: int) -> bool:
    return tag_count > ROOMSTATE_JOIN_TAG_THRESHOLD


class RoomStateTracker:
    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._channels: dict[str, RoomState] = {}

    def update(self, channel: str, key: str, value: str) -> StateChange | str:
        with self._lock.write():
            state = self._channels.setdefault(channel, RoomState())
            return state.update(key, value)

    def apply(
        self, channel: str, tags: Iterable[tuple[str, str]]
    ) -> RoomStateReport:
        """Apply a whole ROOMSTATE batch and decide what to report.

        On the join snapshot only modes that are switched on are reported;
        otherwise every field that changed is.
        """
        pairs = sorted(tags)
        join = is_join_batch(len(pairs))
        lines: list[str] = []
        unknown: list[tuple[str, str]] = []
        with self._lock.write():
            state = self._channels.setdefault(channel, RoomState())
            results = [(key, value, state.update(key, value)) for key, value in pairs]
        for key, value, result in results:
            if isinstance(result, str):
                unknown.append((key, value))
                continue
            report = result.active if join else result.changed
            if report:
                line = describe_change(result)
                if line is not None:
                    lines.append(line)
        return RoomStateReport(lines, unknown, join)

    def get(self, channel: str) -> RoomState:
        with self._lock.read():
            state = self._channels.get(channel)
            return copy.copy(state) if state is not None else RoomState()
