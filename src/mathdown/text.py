"""Extract plain text from mathdown AST nodes.

Example:
    >>> from mathdown import parse, extract_text
    >>> doc = parse("# Energy is $E = mc^2$", math=True)
    >>> extract_text(doc.children[0])
    'Energy is $E = mc^2$'
"""

from mathdown.nodes import (
    BlockMath,
    BlockQuote,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    InlineMath,
    LineBreak,
    Node,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)


def extract_text(node: Node) -> str:
    """Extract plain text from any AST node.

    Recursively walks the tree, concatenating text content. Inline math
    contributes its ``$code$`` form, block math its code. LineBreak and
    SoftBreak contribute a space; blocks are joined with spaces.

    Args:
        node: Any AST node (block or inline).

    Returns:
        Concatenated plain text from the node and its descendants.

    """
    match node:
        case Text():
            return node.content
        case CodeSpan():
            return node.code
        case InlineMath():
            return node.plain_text
        case BlockMath():
            return node.code
        case LineBreak() | SoftBreak():
            return " "
        case FencedCode():
            return node.code
        case Emphasis() | Strong() | Paragraph() | Heading():
            return "".join(extract_text(c) for c in node.children)
        case BlockQuote() | Document():
            return " ".join(extract_text(c) for c in node.children)
        case ThematicBreak():
            return ""
        case _:
            return ""
