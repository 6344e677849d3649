"""Line-window lexer with O(n) guaranteed performance.

Implements a window-based approach: take one line, classify it, then commit.
There are no position rewinds, so every step makes forward progress.

No regex in the hot path.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from mathdown.lexer.classifiers import (
    classify_atx_heading,
    classify_fence,
    classify_quote,
    is_fence_close,
    is_thematic_break,
)
from mathdown.lexer.modes import LexerMode
from mathdown.location import utf8_len
from mathdown.tokens import SourceLine, Token, TokenType


def split_source(source: str) -> list[SourceLine]:
    """Split source text into SourceLines, normalizing line endings."""
    normalized = source.replace("\r\n", "\n").replace("\r", "\n")
    return [SourceLine(text, lineno, 1) for lineno, text in enumerate(normalized.split("\n"), 1)]


class Lexer:
    """Line-window lexer producing block tokens.

    Uses a window-based approach for block scanning:
    1. Take the next line (the window)
    2. Classify the line (pure logic, no position changes)
    3. Commit position (always advances)

    Usage:
            >>> lexer = Lexer("# Hello\\n\\nWorld")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(ATX_HEADING, '# Hello', 1:1)
        Token(BLANK_LINE, '', 2:1)
        Token(PARAGRAPH_LINE, 'World', 3:1)
        Token(EOF, '', 3:1)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_lines",
        "_pos",
        "_mode",
        "_source_file",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
    )

    def __init__(
        self,
        source: str | Sequence[SourceLine],
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text, or pre-split SourceLines for nested
                content that must keep its original positions
            source_file: Optional source file path for locations
        """
        self._lines: Sequence[SourceLine] = (
            split_source(source) if isinstance(source, str) else source
        )
        self._pos = 0
        self._mode = LexerMode.BLOCK
        self._source_file = source_file

        # Fenced code state
        self._fence_char: str = ""
        self._fence_count: int = 0
        self._fence_indent: int = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time

        Complexity: O(n) where n = len(source)
        """
        lines = self._lines
        while self._pos < len(lines):
            line = lines[self._pos]
            if self._mode == LexerMode.CODE_FENCE:
                yield self._scan_fence_line(line)
            else:
                yield self._scan_block_line(line)
            self._pos += 1

        last = lines[-1] if lines else SourceLine("", 1, 1)
        yield self._make_token(TokenType.EOF, "", last.lineno, last.col)

    def ends_in_paragraph(self) -> bool:
        """Whether the lexed content ends with open paragraph text.

        Used by the parser to decide if a following line can continue a
        block quote lazily (CommonMark 5.1 lazy continuation).
        """
        last: Token | None = None
        for token in self.tokenize():
            if token.type != TokenType.EOF:
                last = token
        if last is None or self._mode == LexerMode.CODE_FENCE:
            return False
        if last.type == TokenType.PARAGRAPH_LINE:
            return True
        if last.type == TokenType.BLOCK_QUOTE_MARKER:
            inner = SourceLine(last.value, last.lineno, last.content_col)
            return Lexer([inner], self._source_file).ends_in_paragraph()
        return False

    # =========================================================================
    # Window helpers
    # =========================================================================

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to next multiple of 4.

        Args:
            line: Line content

        Returns:
            (indent_spaces, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
                pos += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
                pos += 1
            else:
                break
        return indent, pos

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        lineno: int,
        col: int,
        marker: str = "",
    ) -> Token:
        return Token(token_type, value, lineno, col, marker, self._source_file)

    # =========================================================================
    # Scanners
    # =========================================================================

    def _scan_block_line(self, line: SourceLine) -> Token:
        """Classify one line in BLOCK mode."""
        text = line.text
        indent, start = self._calc_indent(text)
        rest = text[start:]
        col = line.col + utf8_len(text[:start])

        if not rest.strip():
            return self._make_token(TokenType.BLANK_LINE, "", line.lineno, line.col)

        # Block starts may be indented at most three columns
        if indent < 4:
            quote_marker = classify_quote(rest)
            if quote_marker is not None:
                return self._make_token(
                    TokenType.BLOCK_QUOTE_MARKER,
                    rest[len(quote_marker) :],
                    line.lineno,
                    col,
                    quote_marker,
                )

            if classify_atx_heading(rest) is not None:
                return self._make_token(TokenType.ATX_HEADING, rest, line.lineno, col)

            # Thematic break before fence: "***" is never a fence
            if is_thematic_break(rest):
                return self._make_token(TokenType.THEMATIC_BREAK, rest, line.lineno, col)

            fence = classify_fence(rest)
            if fence is not None:
                self._mode = LexerMode.CODE_FENCE
                self._fence_char = fence.char
                self._fence_count = fence.count
                self._fence_indent = indent
                return self._make_token(
                    TokenType.FENCED_CODE_START,
                    fence.info,
                    line.lineno,
                    col,
                    fence.char * fence.count,
                )

        return self._make_token(TokenType.PARAGRAPH_LINE, rest, line.lineno, col)

    def _scan_fence_line(self, line: SourceLine) -> Token:
        """Classify one line in CODE_FENCE mode."""
        text = line.text
        indent, start = self._calc_indent(text)
        if indent < 4 and is_fence_close(text[start:], self._fence_char, self._fence_count):
            self._mode = LexerMode.BLOCK
            col = line.col + utf8_len(text[:start])
            return self._make_token(
                TokenType.FENCED_CODE_END, text[start:].rstrip(), line.lineno, col
            )

        # CommonMark 4.5: strip up to fence_indent spaces from content lines
        strip = 0
        while strip < len(text) and strip < self._fence_indent and text[strip] == " ":
            strip += 1
        return self._make_token(
            TokenType.FENCED_CODE_CONTENT,
            text[strip:],
            line.lineno,
            line.col + strip,
        )
