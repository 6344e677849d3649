"""
mathdown: Markdown with $inline$ and $$block$$ math

A small Markdown parser with a typed, immutable AST and an opt-in math pass
that turns dollar-delimited notation into InlineMath and BlockMath nodes.
Zero runtime dependencies.

Quick Start:
    >>> from mathdown import parse, render
    >>> doc = parse("The sum is $x + y$.", math=True)
    >>> print(render(doc))
    <p>The sum is <code class="language-math">x + y</code>.</p>

    >>> # Or use the high-level Markdown class
    >>> from mathdown import Markdown
    >>> md = Markdown(plugins=["math"])
    >>> html = md("$$\\nE = mc^2\\n$$")

"""

import dataclasses

from mathdown.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mathdown.errors import MathdownError, NodeTypeMismatchError, PluginError, RenderError
from mathdown.location import SourceLocation
from mathdown.math import MathRewriter, parse_math
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
from mathdown.parser import Parser
from mathdown.renderers.html import HtmlRenderer
from mathdown.renderers.markdown import MarkdownRenderer
from mathdown.serialization import from_dict, from_json, to_dict, to_json
from mathdown.text import extract_text
from mathdown.visitor import BaseRewriter, BaseVisitor, transform

__version__ = "0.1.0"

# Plugin names accepted by Markdown(plugins=...) and the config field each sets
BUILTIN_PLUGINS: dict[str, str] = {
    "math": "math_enabled",
}


def parse(
    source: str,
    *,
    source_file: str | None = None,
    math: bool | None = None,
) -> Document:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        source_file: Optional source file path for locations
        math: Enable the math pass. ``None`` keeps the active ParseConfig's
            setting.

    Returns:
        Document AST root node

    Example:
        >>> doc = parse("$$\\nx + y\\n$$", math=True)
        >>> doc.children[0].code
        'x + y'
    """
    config = get_parse_config()
    if math is not None:
        config = dataclasses.replace(config, math_enabled=math)

    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse_document()


def render(doc: Document) -> str:
    """Render an AST Document to HTML.

    Example:
        >>> print(render(parse("A $x + y$ B", math=True)))
        <p>A <code class="language-math">x + y</code> B</p>
    """
    return HtmlRenderer().render(doc)


def format_markdown(doc: Document) -> str:
    """Render an AST Document back to Markdown source.

    Example:
        >>> format_markdown(parse("A $x + y$ B", math=True))
        'A $x + y$ B\\n'
    """
    return MarkdownRenderer().render(doc)


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown(plugins=["math"])
        >>> md("A $x$ B")
        '<p>A <code class="language-math">x</code> B</p>\\n'

        >>> # Access the AST
        >>> doc = md.parse("$$x$$")
        >>> doc.children[0].code
        'x'

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_plugins")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        source_positions: bool = True,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: List of plugin names to enable (e.g., ["math"]).
                Use ["all"] to enable all built-in plugins.
            source_positions: Stamp nodes with source ranges

        Raises:
            PluginError: If a plugin name is not built in.
        """
        raw_plugins = plugins or []
        if "all" in raw_plugins:
            self._plugins = list(BUILTIN_PLUGINS)
        else:
            for name in raw_plugins:
                if name not in BUILTIN_PLUGINS:
                    raise PluginError(name, f"unknown plugin; available: {sorted(BUILTIN_PLUGINS)}")
            self._plugins = list(raw_plugins)

        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig.from_dict(
            {BUILTIN_PLUGINS[name]: True for name in self._plugins}
            | {"source_positions": source_positions}
        )

    @property
    def config(self) -> ParseConfig:
        """The ParseConfig this processor parses with."""
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render Markdown to HTML in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into AST.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return Parser(source, source_file=source_file).parse_document()

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return HtmlRenderer().render(doc)

    def format(self, doc: Document) -> str:
        """Render AST back to Markdown source."""
        return MarkdownRenderer().render(doc)


__all__ = [  # noqa: RUF022: grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "format_markdown",
    "Markdown",
    "Parser",
    "BUILTIN_PLUGINS",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Math
    "MathRewriter",
    "parse_math",
    # Errors
    "MathdownError",
    "NodeTypeMismatchError",
    "PluginError",
    "RenderError",
    # Location
    "SourceLocation",
    # Nodes
    "Block",
    "Inline",
    "Document",
    "Heading",
    "Paragraph",
    "FencedCode",
    "BlockQuote",
    "ThematicBreak",
    "BlockMath",
    "Text",
    "Emphasis",
    "Strong",
    "CodeSpan",
    "LineBreak",
    "SoftBreak",
    "InlineMath",
    # Renderers
    "HtmlRenderer",
    "MarkdownRenderer",
    # Tree utilities
    "BaseVisitor",
    "BaseRewriter",
    "transform",
    "extract_text",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
