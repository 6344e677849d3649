"""Inline math splitting.

Splits one Text leaf into alternating Text and InlineMath nodes in a single
left-to-right scan. An opener with no closer after it stays ordinary text
and the scan resumes one character later.

Leaves arrive with backslash escapes as written. The delimiter rules read a
view with those escapes resolved, so ``\\\\$`` (an escaped backslash) still
escapes the dollar after it, while an escaped dollar is never a delimiter.
Math code and text fragments are cut from the leaf as written.

"""

from __future__ import annotations

from mathdown.location import SourceLocation, utf8_len
from mathdown.math.delimiters import can_close, can_open
from mathdown.nodes import InlineMath, Node, Text
from mathdown.parsing.charsets import ASCII_PUNCTUATION

# Stands in for an escaped dollar in the delimiter view
_LITERAL_DOLLAR = "\x00"


def _delimiter_view(content: str) -> tuple[str, list[int]]:
    """Resolve escapes for delimiter matching.

    Returns:
        The view, and for each of its characters the offset in ``content``
        where it starts.
    """
    chars: list[str] = []
    offsets: list[int] = []
    length = len(content)
    pos = 0
    while pos < length:
        char = content[pos]
        offsets.append(pos)
        if char == "\\" and pos + 1 < length and content[pos + 1] in ASCII_PUNCTUATION:
            nxt = content[pos + 1]
            chars.append(_LITERAL_DOLLAR if nxt == "$" else nxt)
            pos += 2
        else:
            chars.append(char)
            pos += 1
    return "".join(chars), offsets


def _sub_location(
    location: SourceLocation | None, content: str, start: int, end: int
) -> SourceLocation | None:
    """Range of ``content[start:end]`` inside a single-line text leaf."""
    if location is None or not location.is_single_line:
        return None
    return location.slice_columns(utf8_len(content[:start]), utf8_len(content[:end]))


def split_inline_math(text: Text) -> tuple[Node, ...]:
    """Split a text leaf around its ``$...$`` spans.

    Returns:
        ``(text,)`` with the identical object when nothing matched;
        otherwise the replacement nodes in order, never with two adjacent
        Text nodes.

    Example:
        >>> split_inline_math(Text(None, "A $x$ B"))
        (Text(location=None, content='A '), InlineMath(location=None, code='x'), Text(location=None, content=' B'))
    """
    content = text.content
    location = text.location
    view, offsets = _delimiter_view(content)
    length = len(view)

    nodes: list[Node] = []
    pending = 0
    pos = 0

    while pos < length:
        if not can_open(view, pos):
            pos += 1
            continue

        close = pos + 1
        while close < length and not can_close(view, close):
            close += 1
        if close >= length:
            pos += 1
            continue

        start = offsets[pos]
        end = offsets[close] + 1
        if pending < start:
            nodes.append(Text(_sub_location(location, content, pending, start), content[pending:start]))
        nodes.append(
            InlineMath(
                location=_sub_location(location, content, start, end),
                code=content[start + 1 : end - 1],
            )
        )
        pending = end
        pos = close + 1

    if not nodes:
        return (text,)

    if pending < len(content):
        nodes.append(Text(_sub_location(location, content, pending, len(content)), content[pending:]))
    return tuple(nodes)


__all__ = ["split_inline_math"]
