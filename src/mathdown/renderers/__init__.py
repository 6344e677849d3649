"""mathdown renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML using StringBuilder pattern
- MarkdownRenderer: Renders AST back to Markdown source

Thread Safety:
Renderers hold no per-render state. Safe for concurrent use from multiple
threads.

"""

from mathdown.renderers.html import HtmlRenderer
from mathdown.renderers.markdown import MarkdownRenderer

__all__ = ["HtmlRenderer", "MarkdownRenderer"]
