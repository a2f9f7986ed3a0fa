"""Configuration package exports.

Preferences model plus the thread-safe store shared between event dispatch
and the authorization worker.
"""

from .model import Preferences, is_reward_id
from .store import PreferenceStore

__all__ = ["Preferences", "PreferenceStore", "is_reward_id"]
