"""Markdown formatter.

Renders typed AST back to Markdown source. Math round-trips: block math is
written as ``$$`` fences around the code and inline math as ``$code$``, both
of which the parser reads back with math enabled.

Thread Safety:
MarkdownRenderer holds no per-render state and is safe to share.
"""

import logging
import re

from mathdown.errors import RenderError
from mathdown.nodes import (
    Block,
    BlockMath,
    BlockQuote,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    Inline,
    InlineMath,
    LineBreak,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)
from mathdown.stringbuilder import StringBuilder

logger = logging.getLogger(__name__)

# Characters with inline meaning that plain text must escape
_INLINE_ESCAPE = re.compile(r"([\\`*_$])")

# First characters that would start a block if a text line began with them
_BLOCK_START_CHARS = frozenset("#>~-+=")

_BACKTICK_RUN = re.compile(r"`+")


def escape_text(content: str) -> str:
    """Escape text so the parser reads it back as the same text."""
    return _INLINE_ESCAPE.sub(r"\\\1", content)


class MarkdownRenderer:
    """Render AST to Markdown source.

    Usage:
        >>> from mathdown import parse
        >>> doc = parse("$$\\nx + y\\n$$", math=True)
        >>> MarkdownRenderer().render(doc)
        '$$\\nx + y\\n$$\\n'

    Raises:
        RenderError: For node types the formatter has no rule for.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to Markdown, blocks separated by blank lines."""
        blocks = [self._format_block(child) for child in node.children]
        if not blocks:
            return ""
        return "\n\n".join(blocks) + "\n"

    # =========================================================================
    # Blocks
    # =========================================================================

    def _format_block(self, block: Block) -> str:
        match block:
            case Heading(level=level, children=children):
                content = self._format_inlines(children)
                return f"{'#' * level} {content}".rstrip()
            case Paragraph(children=children):
                lines = self._format_inlines(children).split("\n")
                return "\n".join(self._protect_line_start(line) for line in lines)
            case FencedCode():
                return self._format_fenced_code(block)
            case BlockQuote(children=children):
                inner = "\n\n".join(self._format_block(child) for child in children)
                return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
            case ThematicBreak():
                return "---"
            case BlockMath(code=code):
                return f"$$\n{code}\n$$"
            case Document(children=children):
                return "\n\n".join(self._format_block(child) for child in children)
            case _:
                logger.debug("No Markdown rule for %s", type(block).__name__)
                raise RenderError("markdown", type(block).__name__)

    def _format_fenced_code(self, code: FencedCode) -> str:
        longest = max(
            (len(run) for run in re.findall(f"{re.escape(code.marker)}+", code.code)),
            default=0,
        )
        fence = code.marker * max(3, longest + 1)
        sb = StringBuilder()
        sb.append(fence).append_line(code.info or "")
        sb.append(code.code)
        sb.append(fence)
        return sb.build()

    def _protect_line_start(self, line: str) -> str:
        """Escape a leading character that would otherwise start a block."""
        if line and line[0] in _BLOCK_START_CHARS:
            return f"\\{line}"
        return line

    # =========================================================================
    # Inlines
    # =========================================================================

    def _format_inlines(self, inlines: tuple[Inline, ...]) -> str:
        sb = StringBuilder()
        for inline in inlines:
            sb.append(self._format_inline(inline))
        return sb.build()

    def _format_inline(self, inline: Inline) -> str:
        match inline:
            case Text(content=content):
                return escape_text(content)
            case Emphasis(children=children):
                return f"*{self._format_inlines(children)}*"
            case Strong(children=children):
                return f"**{self._format_inlines(children)}**"
            case CodeSpan(code=code):
                return self._format_code_span(code)
            case InlineMath(code=code):
                return f"${code}$"
            case LineBreak():
                return "\\\n"
            case SoftBreak():
                return "\n"
            case _:
                logger.debug("No Markdown rule for %s", type(inline).__name__)
                raise RenderError("markdown", type(inline).__name__)

    def _format_code_span(self, code: str) -> str:
        longest = max((len(run) for run in _BACKTICK_RUN.findall(code)), default=0)
        fence = "`" * (longest + 1)
        if code.startswith("`") or code.endswith("`") or (
            code.startswith(" ") and code.endswith(" ") and code.strip(" ")
        ):
            code = f" {code} "
        return f"{fence}{code}{fence}"
