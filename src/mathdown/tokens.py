"""Token and TokenType definitions for the mathdown lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, value, and source position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple

from mathdown.location import SourceLocation, utf8_len


class TokenType(Enum):
    """Block-level token types produced by the lexer."""

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Block elements
    ATX_HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, ***, ___
    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_CONTENT = auto()
    FENCED_CODE_END = auto()
    BLOCK_QUOTE_MARKER = auto()  # >

    # Paragraph text
    PARAGRAPH_LINE = auto()


class SourceLine(NamedTuple):
    """One line of lexer input with its position in the original source.

    Nested content (block quote bodies) is re-lexed from SourceLines so that
    every token keeps its original line and column.

    Attributes:
        text: Line content without the trailing newline
        lineno: Line number in the original source (1-indexed)
        col: Column of ``text[0]`` in the original source (1-indexed, bytes)

    """

    text: str
    lineno: int
    col: int


@dataclass(frozen=True, slots=True)
class Token:
    """A block-level token.

    Attributes:
        type: The token type
        value: Token payload (see below)
        lineno: Line number (1-indexed)
        col: Column where the token starts (1-indexed, UTF-8 bytes)
        marker: Structural prefix consumed by the lexer
        source_file: Optional source file path

    Payload by type:
        ATX_HEADING: the line from the first ``#``; the parser re-classifies it
        FENCED_CODE_START: the info string; ``marker`` is the fence run
        FENCED_CODE_CONTENT: the content line with fence indentation removed
        BLOCK_QUOTE_MARKER: the quoted content; ``marker`` is ``>`` plus the
            optional following space
        PARAGRAPH_LINE: the line without leading whitespace

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    marker: str = ""
    source_file: str | None = None

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"

    @property
    def content_col(self) -> int:
        """Column where ``value`` starts (after the marker)."""
        return self.col + len(self.marker)

    @property
    def end_col(self) -> int:
        """Exclusive end column of the token's visible text."""
        return self.content_col + utf8_len(self.value.rstrip())

    @property
    def location(self) -> SourceLocation:
        """Single-line location covering the token."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            end_lineno=self.lineno,
            end_col_offset=self.end_col,
            source_file=self.source_file,
        )
