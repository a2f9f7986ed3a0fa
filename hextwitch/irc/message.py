"""Structured IRCv3 messages and the line codec.

``parse_message`` is total: any string produces a Message, with missing
segments left empty. ``format_message`` is its inverse, so that a parsed line
formats to text which parses back to an equal Message.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import MissingTagsError
from .prefix import Prefix, User, parse_prefix
from .tags import escape, format_tag_segment, parse_tag_segment, split_once, unescape


@dataclass(slots=True)
class Message:
    """A single protocol line.

    ``tags`` is None when the line had no tag segment at all, which is not
    the same as a segment holding no tags. Values are stored escaped.
    """

    prefix: Prefix = field(default_factory=lambda: User(""))
    command: str = ""
    args: list[str] = field(default_factory=list)
    trail: str = ""
    tags: dict[str, str] | None = None

    @property
    def author(self) -> str:
        return self.prefix.name()

    @property
    def has_tags(self) -> bool:
        return self.tags is not None

    @property
    def channel(self) -> str | None:
        return self.args[0] if self.args else None

    def signature(self) -> str:
        """Identify the line by its first argument and author, for debugging."""
        return f"{self.channel}:{self.author}"

    def get_tag(self, key: str) -> str | None:
        if self.tags is None:
            return None
        value = self.tags.get(key)
        return None if value is None else unescape(value)

    def set_tag(self, key: str, value: str) -> str | None:
        """Store ``value`` under ``key`` and return the previous value, if any.

        Raises:
            MissingTagsError: the message has no tag segment.
        """
        if self.tags is None:
            raise MissingTagsError(key)
        old = self.tags.get(key)
        self.tags[key] = escape(value)
        return None if old is None else unescape(old)

    def tag_count(self) -> int:
        return len(self.tags) if self.tags else 0

    def __str__(self) -> str:
        return format_message(self)


def parse_message(line: str) -> Message:
    """Split a raw line into a Message.

    ``@tags :prefix COMMAND arg1 arg2 :trailing text``
    """
    tags: dict[str, str] | None = None
    if line.startswith("@"):
        tag_str, line = split_once(line, " ")
        tags = parse_tag_segment(tag_str[1:])

    if line.startswith(":"):
        prefix_str, line = split_once(line[1:], " ")
    else:
        prefix_str = ""

    cmd_and_args, trail = split_once(line, " :")
    command, args_str = split_once(cmd_and_args, " ")

    return Message(
        prefix=parse_prefix(prefix_str),
        command=command,
        args=args_str.split(),
        trail=trail,
        tags=tags,
    )


def format_message(message: Message) -> str:
    """Render a Message back into a raw line."""
    parts: list[str] = []
    if message.tags is not None:
        parts.append(f"@{format_tag_segment(message.tags)} ")
    parts.append(f":{message.prefix} {message.command}")
    for arg in message.args:
        parts.append(f" {arg}")
    if message.trail:
        parts.append(f" :{message.trail}")
    return "".join(parts)
