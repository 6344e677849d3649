"""Typed AST nodes for mathdown.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── FencedCode
│   ├── BlockQuote
│   ├── ThematicBreak
│   └── BlockMath
└── Inline (inline elements)
    ├── Text
    ├── Emphasis
    ├── Strong
    ├── CodeSpan
    ├── LineBreak
    ├── SoftBreak
    └── InlineMath

Every node carries ``location``. ``None`` marks a synthetic node with no
source provenance (built by hand, or rewritten after parsing).

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from mathdown.errors import NodeTypeMismatchError
from mathdown.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation | None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    The most common inline node, representing literal text. One Text node
    never spans a line break.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break.

    Markdown: ``\\`` at end of line or two trailing spaces
    HTML: <br />

    """


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in paragraph).

    Typically rendered as a newline.

    """


@dataclass(frozen=True, slots=True)
class InlineMath(Node):
    """Inline math expression.

    Markdown: $E = mc^2$
    HTML: <code class="language-math">E = mc^2</code>

    ``code`` is the text between the delimiters. Use ``literal()`` to build
    one by hand and ``with_code()`` to replace the code, which drops the
    source range.

    """

    code: str

    @classmethod
    def literal(cls, code: str) -> InlineMath:
        """Create an inline math node with no source provenance."""
        return cls(location=None, code=code)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> InlineMath:
        """Create from a raw ``{"_type", "location", "code"}`` payload.

        Raises:
            NodeTypeMismatchError: If the payload is not tagged InlineMath.
        """
        return cls(**_literal_fields(cls, raw))

    def with_code(self, code: str) -> InlineMath:
        """Return a copy holding ``code`` and no source range."""
        return InlineMath(location=None, code=code)

    @property
    def plain_text(self) -> str:
        """Literal reconstruction with delimiters, e.g. ``$x$``."""
        return f"${self.code}$"

    @property
    def children(self) -> tuple[()]:
        return ()


# PEP 695 type alias for inline elements
type Inline = (
    Text
    | Emphasis
    | Strong
    | CodeSpan
    | LineBreak
    | SoftBreak
    | InlineMath
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: # Heading
    HTML: <h1>Heading</h1>

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    Markdown: Text separated by blank lines
    HTML: <p>text</p>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    Markdown: ```lang\\ncode\\n```
    HTML: <pre><code class="language-lang">code</code></pre>

    ``code`` keeps one trailing newline per content line, as CommonMark
    renders it.

    """

    code: str
    info: str | None = None
    marker: Literal["`", "~"] = "`"


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > quoted text
    HTML: <blockquote>text</blockquote>

    """

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule).

    Markdown: --- or *** or ___
    HTML: <hr />

    """


@dataclass(frozen=True, slots=True)
class BlockMath(Node):
    """Block math expression.

    Markdown:
        $$
        E = mc^2
        $$

    HTML: <pre><code class="language-math">E = mc^2</code></pre>

    ``code`` is the content between the ``$$`` delimiters. A node produced by
    the math pass carries the whole paragraph's range, which may span
    several lines.

    """

    code: str

    @classmethod
    def literal(cls, code: str) -> BlockMath:
        """Create a block math node with no source provenance."""
        return cls(location=None, code=code)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> BlockMath:
        """Create from a raw ``{"_type", "location", "code"}`` payload.

        Raises:
            NodeTypeMismatchError: If the payload is not tagged BlockMath.
        """
        return cls(**_literal_fields(cls, raw))

    def with_code(self, code: str) -> BlockMath:
        """Return a copy holding ``code`` and no source range."""
        return BlockMath(location=None, code=code)

    @property
    def children(self) -> tuple[()]:
        return ()


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node.

    Contains all top-level blocks in the document.

    """

    children: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = (
    Document
    | Heading
    | Paragraph
    | FencedCode
    | BlockQuote
    | ThematicBreak
    | BlockMath
)


# =============================================================================
# Tree helpers
# =============================================================================

# Nodes whose ``children`` field holds child nodes
CONTAINER_TYPES: tuple[type[Node], ...] = (
    Document,
    Heading,
    Paragraph,
    BlockQuote,
    Emphasis,
    Strong,
)


def children_of(node: Node) -> tuple[Node, ...]:
    """Child nodes of any node; leaves report an empty tuple."""
    if isinstance(node, CONTAINER_TYPES):
        return node.children  # type: ignore[attr-defined]
    return ()


def with_children[N: Node](node: N, children: tuple[Node, ...]) -> N:
    """Rebuild a container with a new children tuple.

    The children are trusted to be well-formed; no structural validation
    is performed.
    """
    return dataclasses.replace(node, children=children)  # type: ignore[call-arg]


def _literal_fields(cls: type[Node], raw: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a raw math payload's tag and return constructor kwargs."""
    actual = raw.get("_type")
    if actual != cls.__name__:
        raise NodeTypeMismatchError(expected=cls.__name__, actual=actual)
    return {"location": raw.get("location"), "code": raw["code"]}
