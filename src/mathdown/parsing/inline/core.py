"""Core inline parsing for the mathdown parser.

Inline content is the newline-joined text of a paragraph or heading.
Parsing runs in three phases:

1. Tokenize: code spans, delimiter runs, escapes, breaks, plain text
2. Match emphasis delimiters (see ``EmphasisMixin``)
3. Build nodes, merging adjacent text into single Text nodes

Dollar signs are ordinary text here. Math detection is a separate pass over
the finished tree (see ``mathdown.math``), so backslash escapes stay in their
source form inside Text leaves and every leaf's content is exactly its source
slice. ``resolve_escapes`` turns them into literal characters once the math
pass has run.

"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Sequence
from typing import TYPE_CHECKING

from mathdown.location import SourceLocation, utf8_len
from mathdown.nodes import CodeSpan, LineBreak, SoftBreak, Text
from mathdown.parsing.charsets import (
    ASCII_PUNCTUATION,
    EMPHASIS_DELIMITERS,
    INLINE_SPECIAL,
)
from mathdown.parsing.inline.emphasis import DelimiterRun, EmphasisMixin, WorkItem
from mathdown.parsing.inline.tokens import (
    CodeSpanToken,
    HardBreakToken,
    InlineToken,
    NodeToken,
    SoftBreakToken,
    TextToken,
)
from mathdown.tokens import SourceLine

if TYPE_CHECKING:
    from mathdown.config import ParseConfig
    from mathdown.nodes import Inline

_ESCAPE = re.compile("\\\\([" + re.escape("".join(sorted(ASCII_PUNCTUATION))) + "])")


def resolve_escapes(content: str) -> str:
    r"""Replace each backslash escape with the character it escapes.

    Example:
        >>> resolve_escapes(r"\*not em\* \alpha \\")
        '*not em* \\alpha \\'
    """
    return _ESCAPE.sub(r"\1", content)


class LineMap:
    """Map offsets in joined inline content back to source positions.

    Args:
        lines: The content lines, in order
        source_file: Source identity copied into every location
    """

    __slots__ = ("_lines", "_starts", "_source_file")

    def __init__(self, lines: Sequence[SourceLine], source_file: str | None = None) -> None:
        self._lines = lines
        self._source_file = source_file
        starts: list[int] = []
        offset = 0
        for line in lines:
            starts.append(offset)
            offset += len(line.text) + 1
        self._starts = starts

    def position(self, offset: int) -> tuple[int, int]:
        """Line and UTF-8 column of a content offset."""
        idx = max(bisect_right(self._starts, offset) - 1, 0)
        line = self._lines[idx]
        return line.lineno, line.col + utf8_len(line.text[: offset - self._starts[idx]])

    def location(self, start: int, end: int) -> SourceLocation:
        lineno, col = self.position(start)
        end_lineno, end_col = self.position(end)
        return SourceLocation(lineno, col, end_lineno, end_col, self._source_file)


class InlineParsingMixin(EmphasisMixin):
    """Mixin for inline content parsing.

    Required Host Attributes:
        - _source_file: str | None
        - _config: ParseConfig

    """

    _source_file: str | None
    _line_map: LineMap | None

    if TYPE_CHECKING:

        @property
        def _config(self) -> ParseConfig: ...

    def _parse_inline(self, lines: Sequence[SourceLine]) -> tuple[Inline, ...]:
        """Parse inline content spread over one or more source lines.

        Args:
            lines: Content lines with their source positions. Leading
                whitespace is expected to be stripped already.

        Returns:
            Tuple of inline nodes.
        """
        text = "\n".join(line.text for line in lines)
        self._line_map = (
            LineMap(lines, self._source_file) if self._config.source_positions else None
        )
        tokens = self._tokenize_inline(text)
        return self._build_inline_nodes(self._process_emphasis(tokens))

    def _span_location(self, start: int, end: int) -> SourceLocation | None:
        if self._line_map is None:
            return None
        return self._line_map.location(start, end)

    # =========================================================================
    # Tokenizer
    # =========================================================================

    def _tokenize_inline(self, text: str) -> list[InlineToken]:
        """Tokenize inline content into a flat token list."""
        tokens: list[InlineToken] = []
        text_len = len(text)
        pos = 0

        while pos < text_len:
            char = text[pos]

            if char == "`":
                pos = self._scan_code_span(text, pos, tokens)

            elif char in EMPHASIS_DELIMITERS:
                end = pos
                while end < text_len and text[end] == char:
                    end += 1
                before = text[pos - 1] if pos > 0 else ""
                after = text[end] if end < text_len else ""
                tokens.append(self._classify_delimiter_run(char, end - pos, before, after, pos))
                pos = end

            elif char == "\\":
                nxt = text[pos + 1] if pos + 1 < text_len else ""
                if nxt == "\n":
                    tokens.append(HardBreakToken(pos, pos + 2))
                    pos += 2
                elif nxt and nxt in ASCII_PUNCTUATION:
                    # Kept as written; math code needs the backslash
                    tokens.append(TextToken(text[pos : pos + 2], pos, pos + 2))
                    pos += 2
                else:
                    tokens.append(TextToken("\\", pos, pos + 1))
                    pos += 1

            elif char == "\n":
                trailing = self._strip_trailing_spaces(tokens)
                if trailing >= 2:
                    tokens.append(HardBreakToken(pos - trailing, pos + 1))
                else:
                    tokens.append(SoftBreakToken(pos, pos + 1))
                pos += 1

            else:
                end = pos + 1
                while end < text_len and text[end] not in INLINE_SPECIAL:
                    end += 1
                tokens.append(TextToken(text[pos:end], pos, end))
                pos = end

        self._strip_trailing_spaces(tokens, whitespace=" \t")
        return tokens

    def _scan_code_span(self, text: str, pos: int, tokens: list[InlineToken]) -> int:
        """Scan a code span starting at a backtick run.

        CommonMark 6.1: the closing run must have exactly the opener's length.
        Without one, the backticks are literal text.

        Returns:
            Position after the consumed characters.
        """
        text_len = len(text)
        run_end = pos
        while run_end < text_len and text[run_end] == "`":
            run_end += 1
        run = run_end - pos

        search = run_end
        while True:
            close = text.find("`", search)
            if close == -1:
                tokens.append(TextToken("`" * run, pos, run_end))
                return run_end
            close_end = close
            while close_end < text_len and text[close_end] == "`":
                close_end += 1
            if close_end - close == run:
                break
            search = close_end

        code = text[run_end:close].replace("\n", " ")
        if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip(" "):
            code = code[1:-1]
        tokens.append(CodeSpanToken(code, pos, close_end))
        return close_end

    def _strip_trailing_spaces(self, tokens: list[InlineToken], whitespace: str = " ") -> int:
        """Remove trailing whitespace from the last text token.

        Returns:
            Number of characters removed.
        """
        if not tokens:
            return 0
        last = tokens[-1]
        if not isinstance(last, TextToken):
            return 0
        stripped = last.content.rstrip(whitespace)
        removed = len(last.content) - len(stripped)
        if removed:
            if stripped:
                tokens[-1] = TextToken(stripped, last.start, last.end - removed)
            else:
                tokens.pop()
                # A run of spaces may follow another plain text run
                removed += self._strip_trailing_spaces(tokens, whitespace)
        return removed

    # =========================================================================
    # Node building
    # =========================================================================

    def _build_inline_nodes(self, items: Sequence[WorkItem]) -> tuple[Inline, ...]:
        """Convert tokens to nodes, merging adjacent text."""
        nodes: list[Inline] = []
        pending: list[str] = []
        pending_start = pending_end = 0

        def flush() -> None:
            if pending:
                content = "".join(pending)
                nodes.append(Text(self._span_location(pending_start, pending_end), content))
                pending.clear()

        for item in items:
            if isinstance(item, DelimiterRun):
                item = item.leftover()
            match item:
                case TextToken(content=content, start=start, end=end):
                    if not content:
                        continue
                    if not pending:
                        pending_start = start
                    pending.append(content)
                    pending_end = end
                case CodeSpanToken(code=code, start=start, end=end):
                    flush()
                    nodes.append(CodeSpan(self._span_location(start, end), code))
                case NodeToken(node=node):
                    flush()
                    nodes.append(node)  # type: ignore[arg-type]
                case HardBreakToken(start=start, end=end):
                    flush()
                    nodes.append(LineBreak(self._span_location(start, end)))
                case SoftBreakToken(start=start, end=end):
                    flush()
                    nodes.append(SoftBreak(self._span_location(start, end)))

        flush()
        return tuple(nodes)
