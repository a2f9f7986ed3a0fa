from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

PREF_PREFIX = "PREF_"
LEGACY_KEYS = {"htdebug": "debug"}


def is_reward_id(name: str) -> bool:
    """Return True if ``name`` can key a custom reward entry.

    Reward entries share a namespace with preference names, so anything
    carrying the preference prefix is rejected.
    """
    return bool(name) and not name.startswith(PREF_PREFIX)


class Preferences(BaseModel):
    """Plugin preferences.

    Attributes:
        debug: Surface raw lines and every prediction value for diagnosis.
        follow_hosts: Join the target channel when a host notice arrives.
        whispers_in_current: Echo whispers into the focused tab too.
        announce: Print a notice when preferences are toggled.
        client_id: Twitch application client ID used for authorization.
        oauth_token: Last validated OAuth token.
        rewards: Custom channel reward IDs mapped to display names.
    """

    debug: bool = False
    follow_hosts: bool = False
    whispers_in_current: bool = False
    announce: bool = False
    client_id: str | None = None
    oauth_token: str | None = None
    rewards: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_keys(cls, data: Any) -> Any:
        """Move values stored under retired names onto their new fields."""
        if not isinstance(data, Mapping):
            return data
        migrated = dict(data)
        for old, new in LEGACY_KEYS.items():
            if old in migrated:
                value = migrated.pop(old)
                migrated.setdefault(new, value)
        return migrated

    @field_validator("rewards", mode="before")
    @classmethod
    def validate_rewards(cls, v: Any) -> dict[str, str]:
        """Lower-case reward IDs and drop entries that cannot be reward IDs."""
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("rewards must be a mapping")
        validated: dict[str, str] = {}
        for key, name in v.items():
            if isinstance(key, str) and is_reward_id(key.strip()):
                validated[key.strip().lower()] = str(name)
        return validated

    @field_validator("client_id", "oauth_token", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Preferences:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
