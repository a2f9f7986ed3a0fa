"""Thread-safe preference store.

The store is the one piece of configuration the authorization worker writes
while the dispatch thread reads, so every access goes through the
reader/writer lock.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from ..logs import logger
from ..utils import ReadWriteLock
from .model import Preferences, is_reward_id

ENV_PREFIX = "HEXTWITCH_"
_BOOL_FIELDS = ("debug", "follow_hosts", "whispers_in_current", "announce")
_STR_FIELDS = ("client_id", "oauth_token")
_TRUTHY = ("true", "1", "yes", "on")


class PreferenceStore:
    def __init__(self, preferences: Preferences | None = None) -> None:
        self._prefs = preferences or Preferences()
        self._lock = ReadWriteLock()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PreferenceStore:
        """Build a store from ``HEXTWITCH_*`` variables.

        ``HEXTWITCH_HTDEBUG`` is accepted as the legacy spelling of
        ``HEXTWITCH_DEBUG``. Rewards are read from ``HEXTWITCH_REWARDS`` as
        ``id=name`` pairs separated by commas.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for field in (*_BOOL_FIELDS, "htdebug"):
            raw = env.get(f"{ENV_PREFIX}{field.upper()}")
            if raw is not None:
                data[field] = raw.strip().lower() in _TRUTHY
        for field in _STR_FIELDS:
            raw = env.get(f"{ENV_PREFIX}{field.upper()}")
            if raw is not None:
                data[field] = raw
        rewards_raw = env.get(f"{ENV_PREFIX}REWARDS")
        if rewards_raw:
            rewards: dict[str, str] = {}
            for pair in rewards_raw.split(","):
                reward_id, sep, name = pair.partition("=")
                if sep:
                    rewards[reward_id.strip()] = name.strip()
            data["rewards"] = rewards
        if "htdebug" in data and "debug" not in data:
            logger.log_event("config", "migrated_key", old="htdebug", new="debug")
        return cls(Preferences.from_dict(data))

    def snapshot(self) -> Preferences:
        with self._lock.read():
            return self._prefs.model_copy(deep=True)

    def get(self, name: str) -> Any:
        with self._lock.read():
            return getattr(self._prefs, name)

    def set(self, name: str, value: Any) -> None:
        if name not in Preferences.model_fields:
            raise KeyError(name)
        with self._lock.write():
            data = self._prefs.model_dump()
            data[name] = value
            self._prefs = Preferences.model_validate(data)

    def toggle(self, name: str) -> bool:
        """Flip a boolean preference and return its new value."""
        if name not in _BOOL_FIELDS:
            raise KeyError(name)
        with self._lock.write():
            new = not getattr(self._prefs, name)
            self._prefs = self._prefs.model_copy(update={name: new})
        if self.get("announce"):
            logger.log_event("config", "toggle", name=name, value=new)
        return new

    @property
    def debug(self) -> bool:
        return bool(self.get("debug"))

    # Rewards

    def get_reward(self, reward_id: str) -> str | None:
        with self._lock.read():
            return self._prefs.rewards.get(reward_id.lower())

    def set_reward(self, reward_id: str, name: str) -> bool:
        if not is_reward_id(reward_id):
            return False
        with self._lock.write():
            rewards = dict(self._prefs.rewards)
            rewards[reward_id.lower()] = name
            self._prefs = self._prefs.model_copy(update={"rewards": rewards})
        logger.log_event("config", "reward_set", reward_id=reward_id, name=name)
        return True

    def unset_reward(self, reward_id: str) -> bool:
        with self._lock.write():
            rewards = dict(self._prefs.rewards)
            removed = rewards.pop(reward_id.lower(), None)
            self._prefs = self._prefs.model_copy(update={"rewards": rewards})
        if removed is not None:
            logger.log_event(
                "config", "reward_unset", logging.DEBUG, reward_id=reward_id
            )
        return removed is not None

    def rewards(self) -> dict[str, str]:
        with self._lock.read():
            return dict(self._prefs.rewards)

    # Token

    def get_token(self) -> str | None:
        return self.get("oauth_token")

    def set_token(self, token: str) -> None:
        self.set("oauth_token", token)

    def clear_token(self) -> None:
        with self._lock.write():
            self._prefs = self._prefs.model_copy(update={"oauth_token": None})
