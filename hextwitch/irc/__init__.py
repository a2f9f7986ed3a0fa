"""IRCv3 line codec.

Parses raw protocol lines into structured messages, formats them back, and
owns tag value escaping.
"""

from .message import Message, format_message, parse_message  # noqa: F401
from .prefix import Prefix, ServerName, User, parse_prefix  # noqa: F401
from .tags import escape, unescape  # noqa: F401

__all__ = [
    "Message",
    "Prefix",
    "ServerName",
    "User",
    "escape",
    "format_message",
    "parse_message",
    "parse_prefix",
    "unescape",
]
