"""Tag value escaping and the small splitting helpers the codec shares.

Tag values travel escaped on the wire; both directions live here so the
substitution table is written down exactly once.
"""

from __future__ import annotations

__all__ = ["escape", "unescape", "split_once", "parse_tag_segment", "format_tag_segment"]

# (raw character, escape code) pairs
_ESCAPES = (
    ("\\", "\\"),
    ("\n", "n"),
    ("\r", "r"),
    (" ", "s"),
    (";", ":"),
)
_ESCAPE_MAP = {raw: "\\" + code for raw, code in _ESCAPES}
_UNESCAPE_MAP = {code: raw for raw, code in _ESCAPES}


def escape(value: str) -> str:
    """Replace characters that may not appear in a tag value with escapes."""
    return "".join(_ESCAPE_MAP.get(ch, ch) for ch in value)


def unescape(value: str) -> str:
    """Reverse :func:`escape`.

    Unrecognized sequences are kept as written, backslash included, and a
    lone trailing backslash is kept as well.
    """
    if "\\" not in value:
        return value
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append(ch)
        elif nxt in _UNESCAPE_MAP:
            out.append(_UNESCAPE_MAP[nxt])
        else:
            out.append(ch)
            out.append(nxt)
    return "".join(out)


def split_once(text: str, delim: str) -> tuple[str, str]:
    """Split at the first ``delim``; a missing delimiter leaves the right side empty."""
    left, _, right = text.partition(delim)
    return left, right


def parse_tag_segment(segment: str) -> dict[str, str]:
    """Parse ``key=value;key2;...`` (without the leading ``@``).

    Values stay escaped. A later duplicate key replaces an earlier one and
    empty keys are skipped, so a bare ``@`` yields an empty mapping.
    """
    tags: dict[str, str] = {}
    for pair in segment.split(";"):
        key, value = split_once(pair, "=")
        if key:
            tags[key] = value
    return tags


def format_tag_segment(tags: dict[str, str]) -> str:
    """Render escaped tags sorted by key; empty values become bare keys."""
    return ";".join(
        key if not value else f"{key}={value}" for key, value in sorted(tags.items())
    )
