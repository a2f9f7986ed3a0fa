"""
Configuration constants for HexTwitch

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


# Badge rendering
BADGE_CACHE_SIZE = _get_env_int(
    "BADGE_CACHE_SIZE", 50
)  # Distinct (badges, badge-info) pairs kept rendered

# Room state
ROOMSTATE_JOIN_TAG_THRESHOLD = _get_env_int(
    "ROOMSTATE_JOIN_TAG_THRESHOLD", 2
)  # A ROOMSTATE with more tags than this is the on-join snapshot

# Authorization handoff
AUTH_WAIT_TIMEOUT_SECONDS = _get_env_int(
    "AUTH_WAIT_TIMEOUT_SECONDS", 300
)  # Pending authorization is abandoned after this long
TOKEN_VALIDATION_MAX_ATTEMPTS = _get_env_int(
    "TOKEN_VALIDATION_MAX_ATTEMPTS", 3
)  # Attempts for remote validation on network failure
RETRY_MAX_BACKOFF_SECONDS = _get_env_int(
    "RETRY_MAX_BACKOFF_SECONDS", 8
)  # Upper bound for exponential wait between validation attempts

# Network/HTTP constants
HTTP_REQUEST_TIMEOUT_SECONDS = _get_env_int(
    "HTTP_REQUEST_TIMEOUT_SECONDS", 30
)  # Default HTTP request timeout

# Twitch endpoints (public, well-known)
TWITCH_VALIDATE_URL = "https://id.twitch.tv/oauth2/validate"
TWITCH_AUTHORIZE_URL = "https://id.twitch.tv/oauth2/authorize"
