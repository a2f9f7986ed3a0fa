"""Error hierarchy and error logging helpers."""

from .handling import classify_error, is_retryable_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    InternalError,
    MissingTagsError,
    NetworkError,
    OAuthError,
    ParsingError,
)

__all__ = [
    "InternalError",
    "MissingTagsError",
    "NetworkError",
    "OAuthError",
    "ParsingError",
    "classify_error",
    "is_retryable_error",
    "log_error",
]
