"""Authorization: token validation and the polled background handoff."""

from .handler import ApiHandler, ApiState, authorization_url  # noqa: F401
from .token import (  # noqa: F401
    TokenClient,
    TokenInfo,
    validate_token,
    validate_token_blocking,
)

__all__ = [
    "ApiHandler",
    "ApiState",
    "TokenClient",
    "TokenInfo",
    "authorization_url",
    "validate_token",
    "validate_token_blocking",
]
