from __future__ import annotations

import aiohttp

# Import structured logging
from ..logging_config import log_structured_error
from .internal import (
    InternalError,
    MissingTagsError,
    NetworkError,
    OAuthError,
    ParsingError,
)


def classify_error(error: BaseException) -> str:
    """Return the aggregation category used for an exception."""
    if isinstance(error, NetworkError | OSError | ConnectionError | aiohttp.ClientError):
        return "network"
    if isinstance(error, OAuthError):
        return "auth"
    if isinstance(error, ParsingError | ValueError):
        return "parsing"
    if isinstance(error, MissingTagsError):
        return "misuse"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: BaseException, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    This function formats and logs an error message along with the string
    representation of the exception using structured logging for better
    error tracking and aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.

    Returns:
        None

    Raises:
        No exceptions are raised by this function.
    """
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


def is_retryable_error(error: BaseException) -> bool:
    """Check if an exception should trigger a retry."""
    return isinstance(error, NetworkError | OSError | ConnectionError)


__all__ = ["classify_error", "log_error", "is_retryable_error"]
