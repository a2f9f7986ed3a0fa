"""Presentation state derived from message tags.

Badge rendering, the user's own badges, predictions, room modes and tab
severity, plus the helpers that print through the host.
"""

from .badges import (  # noqa: F401
    NO_BADGES,
    BadgeParseCache,
    Badges,
    UnknownBadges,
    render_badges,
)
from .prediction import (  # noqa: F401
    Predict,
    PredictionBadge,
    PredictionTracker,
    PredictMode,
    PredictUpdate,
    PredictVariant,
)
from .printing import Output, PrintEvent  # noqa: F401
from .room_state import (  # noqa: F401
    Change,
    FollowMode,
    RoomState,
    RoomStateReport,
    RoomStateTracker,
    StateChange,
    StateField,
    describe_change,
)
from .tabs import TabColor, TabSeverityTracker  # noqa: F401
from .userstate import UserBadgeCache  # noqa: F401

__all__ = [
    "NO_BADGES",
    "BadgeParseCache",
    "Badges",
    "Change",
    "FollowMode",
    "Output",
    "Predict",
    "PredictMode",
    "PredictUpdate",
    "PredictVariant",
    "PredictionBadge",
    "PredictionTracker",
    "PrintEvent",
    "RoomState",
    "RoomStateReport",
    "RoomStateTracker",
    "StateChange",
    "StateField",
    "TabColor",
    "TabSeverityTracker",
    "UnknownBadges",
    "UserBadgeCache",
    "describe_change",
    "render_badges",
]
