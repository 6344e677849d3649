"""HTML renderer using StringBuilder pattern.

Renders typed AST to HTML with O(n) performance using StringBuilder.

Math is emitted in the ``language-math`` code convention understood by
client-side math typesetters: block math as a preformatted code block,
inline math as an inline code span, both with the code HTML-escaped.

Thread Safety:
HtmlRenderer holds no per-render state. Multiple threads can safely share a
single instance and call render() concurrently.
"""

import html
import logging

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

MATH_CLASS = "language-math"


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    Python's html.escape() escapes ' to &#x27; which CommonMark doesn't require.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> from mathdown import parse
        >>> doc = parse("A $x + y$ B", math=True)
        >>> HtmlRenderer().render(doc)
        '<p>A <code class="language-math">x + y</code> B</p>\\n'

    Raises:
        RenderError: For node types the renderer has no rule for.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string.

        Args:
            node: Document AST root

        Returns:
            HTML string
        """
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder) -> None:
        """Render a block node to StringBuilder."""
        match block:
            case Heading(level=level, children=children):
                sb.append(f"<h{level}>")
                self._render_inlines(children, sb)
                sb.append(f"</h{level}>\n")
            case Paragraph(children=children):
                sb.append("<p>")
                self._render_inlines(children, sb)
                sb.append("</p>\n")
            case FencedCode():
                self._render_fenced_code(block, sb)
            case BlockQuote(children=children):
                sb.append("<blockquote>\n")
                for child in children:
                    self._render_block(child, sb)
                sb.append("</blockquote>\n")
            case ThematicBreak():
                sb.append("<hr />\n")
            case BlockMath(code=code):
                sb.append(f'<pre><code class="{MATH_CLASS}">')
                sb.append(html_escape(code))
                sb.append("</code></pre>\n")
            case Document(children=children):
                for child in children:
                    self._render_block(child, sb)
            case _:
                logger.debug("No HTML rule for %s", type(block).__name__)
                raise RenderError("html", type(block).__name__)

    def _render_fenced_code(self, code: FencedCode, sb: StringBuilder) -> None:
        """Render fenced code block."""
        lang_class = ""
        if code.info:
            lang = code.info.split()[0]
            lang_class = f' class="language-{html_escape(lang)}"'
        sb.append(f"<pre><code{lang_class}>")
        sb.append(html_escape(code.code))
        sb.append("</code></pre>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], sb: StringBuilder) -> None:
        for inline in inlines:
            self._render_inline(inline, sb)

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        """Render an inline node to StringBuilder."""
        match inline:
            case Text(content=content):
                sb.append(html_escape(content))
            case Emphasis(children=children):
                sb.append("<em>")
                self._render_inlines(children, sb)
                sb.append("</em>")
            case Strong(children=children):
                sb.append("<strong>")
                self._render_inlines(children, sb)
                sb.append("</strong>")
            case CodeSpan(code=code):
                sb.append("<code>").append(html_escape(code)).append("</code>")
            case InlineMath(code=code):
                sb.append(f'<code class="{MATH_CLASS}">')
                sb.append(html_escape(code))
                sb.append("</code>")
            case LineBreak():
                sb.append("<br />\n")
            case SoftBreak():
                sb.append("\n")
            case _:
                logger.debug("No HTML rule for %s", type(inline).__name__)
                raise RenderError("html", type(inline).__name__)
