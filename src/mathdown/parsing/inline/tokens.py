"""Typed inline tokens for the mathdown parser.

Uses NamedTuples for inline token representation. Every token records the
``start``/``end`` offsets of the source text it was scanned from, measured
in the newline-joined inline content. The parser maps those offsets back to
line and column ranges with ``LineMap``.

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    from mathdown.parsing.inline.tokens import DelimiterToken, TextToken

    token = DelimiterToken("*", 2, True, False, 0, 2)
    match token:
        case DelimiterToken(char="*", count=count):
            print(f"Asterisk delimiter with count {count}")

"""

from __future__ import annotations

from typing import Literal, NamedTuple

from mathdown.nodes import Node

# PEP 695 type alias for delimiter characters
type DelimiterChar = Literal["*", "_"]


class DelimiterToken(NamedTuple):
    """Emphasis delimiter run.

    Attributes:
        char: The delimiter character ("*" or "_").
        count: Number of consecutive delimiter characters.
        can_open: Whether this run can open emphasis.
        can_close: Whether this run can close emphasis.
        start: Offset of the first delimiter character.
        end: Offset just past the last delimiter character.

    """

    char: DelimiterChar
    count: int
    can_open: bool
    can_close: bool
    start: int
    end: int


class TextToken(NamedTuple):
    """Plain text token.

    ``content`` may be shorter than the source slice when the token came
    from a backslash escape.

    """

    content: str
    start: int
    end: int


class CodeSpanToken(NamedTuple):
    """Inline code span token.

    Attributes:
        code: The code content (already processed per CommonMark rules).

    """

    code: str
    start: int
    end: int


class NodeToken(NamedTuple):
    """Pre-built AST node token (matched emphasis)."""

    node: Node
    start: int
    end: int


class HardBreakToken(NamedTuple):
    """Hard line break (backslash + newline or two trailing spaces)."""

    start: int
    end: int


class SoftBreakToken(NamedTuple):
    """Soft line break (single newline in paragraph)."""

    start: int
    end: int


# PEP 695 type alias for all inline tokens
type InlineToken = (
    DelimiterToken | TextToken | CodeSpanToken | NodeToken | HardBreakToken | SoftBreakToken
)


__all__ = [
    "DelimiterChar",
    "DelimiterToken",
    "TextToken",
    "CodeSpanToken",
    "NodeToken",
    "HardBreakToken",
    "SoftBreakToken",
    "InlineToken",
]
