"""Recursive descent parser producing typed AST.

Consumes token stream from Lexer and builds typed AST nodes.
Produces immutable (frozen) dataclass nodes for thread-safety.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (emphasis, code spans, escapes)
- `BlockParsingMixin`: Block-level content (headings, code, quotes)

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from mathdown.config import ParseConfig, get_parse_config
from mathdown.lexer import Lexer, split_source
from mathdown.location import SourceLocation, utf8_len
from mathdown.math import parse_math
from mathdown.nodes import Block, Document, Node, Text
from mathdown.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    TokenNavigationMixin,
)
from mathdown.parsing.inline import LineMap, resolve_escapes
from mathdown.tokens import SourceLine, Token
from mathdown.visitor import transform


def _resolve_text_escapes(node: Node) -> Node:
    """Resolve backslash escapes in a Text leaf; other nodes pass through."""
    if isinstance(node, Text):
        content = resolve_escapes(node.content)
        if content != node.content:
            return dataclasses.replace(node, content=content)
    return node


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Markdown.

    Consumes tokens from Lexer and builds typed AST.

    Usage:
            >>> parser = Parser("# Hello\\n\\nWorld")
            >>> blocks = parser.parse()
            >>> blocks[0]
        Heading(location=..., level=1, children=(Text(location=..., content='Hello'),))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_lines",
        "_tokens",
        "_pos",
        "_current",
        "_source_file",
        "_line_map",
    )

    def __init__(
        self,
        source: str | Sequence[SourceLine],
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Markdown source text, or positioned lines of nested content
            source_file: Optional source file path for locations

        """
        self._lines = split_source(source) if isinstance(source, str) else source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None
        self._line_map: LineMap | None = None

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    def parse(self) -> tuple[Block, ...]:
        """Parse source into a tuple of top-level blocks.

        Text leaves keep backslash escapes as written; ``parse_document``
        resolves them after the math pass.
        """
        self._tokens = list(Lexer(self._lines, self._source_file).tokenize())
        self._pos = 0
        self._current = self._tokens[0]

        blocks: list[Block] = []
        while not self._at_end():
            block = self._parse_block()
            if block is not None:
                blocks.append(block)
        return tuple(blocks)

    def _parse_nested(self, lines: Sequence[SourceLine]) -> tuple[Block, ...]:
        """Parse container content with a sub-parser sharing this config."""
        return Parser(lines, self._source_file).parse()

    def parse_document(self) -> Document:
        """Parse source into a Document, running the math pass when enabled.

        Math sees the text with its escapes still written out, so code such
        as ``\\{x\\}`` keeps its backslashes. Escapes in the remaining Text
        leaves are resolved last. The Document's range covers the whole
        source.
        """
        blocks = self.parse()
        location = None
        if self._config.source_positions and self._lines:
            first = self._lines[0]
            last = self._lines[-1]
            location = SourceLocation(
                lineno=first.lineno,
                col_offset=first.col,
                end_lineno=last.lineno,
                end_col_offset=last.col + utf8_len(last.text),
                source_file=self._source_file,
            )
        doc = parse_math(Document(location=location, children=blocks), self._config)
        return transform(doc, _resolve_text_escapes)
