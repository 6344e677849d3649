"""Block parsing for the mathdown parser.

Provides block dispatch and block parsing (headings, thematic breaks,
fenced code, block quotes, paragraphs).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathdown.lexer import Lexer
from mathdown.lexer.classifiers import classify_atx_heading
from mathdown.location import SourceLocation, utf8_len
from mathdown.nodes import (
    Block,
    BlockQuote,
    FencedCode,
    Heading,
    Paragraph,
    ThematicBreak,
)
from mathdown.tokens import SourceLine, Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mathdown.config import ParseConfig
    from mathdown.nodes import Inline


class BlockParsingMixin:
    """Mixin for block-level parsing.

    Required Host Attributes:
        - _current: Token | None
        - _source_file: str | None
        - _config: ParseConfig

    Required Host Methods:
        - _advance() -> Token | None
        - _at_end() -> bool
        - _check(token_type) -> bool
        - _parse_inline(lines) -> tuple[Inline, ...]
        - _parse_nested(lines) -> tuple[Block, ...]

    """

    _current: Token | None
    _source_file: str | None

    if TYPE_CHECKING:

        @property
        def _config(self) -> ParseConfig: ...

        def _advance(self) -> Token | None: ...

        def _at_end(self) -> bool: ...

        def _check(self, token_type: TokenType) -> bool: ...

        def _parse_inline(self, lines: Sequence[SourceLine]) -> tuple[Inline, ...]: ...

        def _parse_nested(self, lines: Sequence[SourceLine]) -> tuple[Block, ...]: ...

    def _parse_block(self) -> Block | None:
        """Parse the block starting at the current token.

        Returns:
            The parsed block, or None for blank lines.
        """
        token = self._current
        assert token is not None

        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()
                return None
            case TokenType.ATX_HEADING:
                return self._parse_atx_heading(token)
            case TokenType.THEMATIC_BREAK:
                self._advance()
                return ThematicBreak(location=self._location(token.location))
            case TokenType.FENCED_CODE_START:
                return self._parse_fenced_code(token)
            case TokenType.BLOCK_QUOTE_MARKER:
                return self._parse_block_quote(token)
            case TokenType.PARAGRAPH_LINE:
                return self._parse_paragraph(token)
            case _:
                self._advance()
                return None

    def _location(
        self,
        start: SourceLocation | Token,
        end: Token | None = None,
    ) -> SourceLocation | None:
        """Build a node location, or None when positions are disabled.

        Args:
            start: Location to use as-is, or the block's first token
            end: The block's last token when it differs from ``start``
        """
        if not self._config.source_positions:
            return None
        if isinstance(start, SourceLocation):
            return start
        last = end or start
        return SourceLocation(
            lineno=start.lineno,
            col_offset=start.col,
            end_lineno=last.lineno,
            end_col_offset=last.end_col,
            source_file=self._source_file,
        )

    def _parse_atx_heading(self, token: Token) -> Heading:
        """Parse ATX heading (# Heading)."""
        self._advance()
        heading = classify_atx_heading(token.value)
        assert heading is not None
        content = token.value[heading.content_start : heading.content_end]
        col = token.col + utf8_len(token.value[: heading.content_start])
        children = self._parse_inline([SourceLine(content, token.lineno, col)]) if content else ()
        return Heading(
            location=self._location(token),
            level=heading.level,  # type: ignore[arg-type]
            children=children,
        )

    def _parse_fenced_code(self, start: Token) -> FencedCode:
        """Parse fenced code block.

        An unclosed fence runs to the end of its container.
        """
        self._advance()
        lines: list[str] = []
        last = start
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.FENCED_CODE_CONTENT:
                lines.append(token.value)
                last = token
                self._advance()
            elif token.type == TokenType.FENCED_CODE_END:
                last = token
                self._advance()
                break
            else:
                break

        code = "".join(f"{line}\n" for line in lines)
        return FencedCode(
            location=self._location(start, last),
            code=code,
            info=start.value or None,
            marker=start.marker[0],  # type: ignore[arg-type]
        )

    def _parse_block_quote(self, start: Token) -> BlockQuote:
        """Parse block quote (> quoted text).

        Quote content is re-parsed as a nested document. A line without a
        ``>`` marker continues the quote lazily while the quoted content
        ends in a paragraph (CommonMark 5.1).
        """
        inner: list[SourceLine] = []
        last = start
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.BLOCK_QUOTE_MARKER:
                inner.append(SourceLine(token.value, token.lineno, token.content_col))
            elif token.type == TokenType.PARAGRAPH_LINE and self._is_lazy_continuation(
                inner, token
            ):
                inner.append(SourceLine(token.value, token.lineno, token.col))
            else:
                break
            last = token
            self._advance()

        return BlockQuote(
            location=self._location(start, last),
            children=self._parse_nested(inner),
        )

    def _is_lazy_continuation(self, inner: Sequence[SourceLine], token: Token) -> bool:
        """Check whether a paragraph line continues the quoted paragraph."""
        if not Lexer(inner, self._source_file).ends_in_paragraph():
            return False
        # The line must still read as paragraph text once inside the quote
        line = SourceLine(token.value, token.lineno, token.col)
        first = next(Lexer([line], self._source_file).tokenize())
        return first.type == TokenType.PARAGRAPH_LINE

    def _parse_paragraph(self, start: Token) -> Paragraph:
        """Parse consecutive paragraph lines into one paragraph."""
        lines: list[SourceLine] = []
        last = start
        while self._check(TokenType.PARAGRAPH_LINE):
            token = self._current
            assert token is not None
            lines.append(SourceLine(token.value, token.lineno, token.col))
            last = token
            self._advance()

        return Paragraph(
            location=self._location(start, last),
            children=self._parse_inline(lines),
        )
