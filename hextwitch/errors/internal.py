"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the few places where the
plugin can fail locally. Nothing here is fatal to the host: the codec and the
channel state machines degrade instead of raising, so the hierarchy is mostly
exercised by the authorization flow and by misuse of the message API.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transient network/IO issues (safe to retry).
  OAuthError           – Authentication / authorization related failures.
  ParsingError         – Response parsing / schema validation issues.
  MissingTagsError     – Tag mutation on a message with no tag segment.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    This includes connection timeouts, resets, or other transient network
    failures that may be retried.
    """


class OAuthError(InternalError):
    """Exception raised for OAuth authentication or authorization failures.

    These errors indicate a rejected or expired token and are never retried;
    the authorization flow turns them into a state transition instead.
    """


class ParsingError(InternalError):
    """Exception raised for response parsing or schema validation errors."""


class MissingTagsError(InternalError):
    """Raised when a tag is set on a message that carries no tag segment.

    A line without a leading ``@`` belongs to a distinct message class and can
    never gain tags. This is separate from a key simply being absent.
    """

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Message has no tag segment; cannot set {key!r}", data={"key": key}
        )
        self.key = key


__all__ = [
    "InternalError",
    "NetworkError",
    "OAuthError",
    "ParsingError",
    "MissingTagsError",
]
