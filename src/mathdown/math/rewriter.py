"""Document-wide math pass.

Runs after parsing when math is enabled. Paragraphs that read as block math
become BlockMath nodes; every other Text leaf is split around inline
``$...$`` spans. Containers are rebuilt only where something changed, so a
document without math comes back as the identical object.

"""

from __future__ import annotations

from collections.abc import Sequence

from mathdown.config import ParseConfig, get_parse_config
from mathdown.math.block import block_math_code
from mathdown.math.inline import split_inline_math
from mathdown.nodes import BlockMath, Document, InlineMath, Node, Paragraph, Text
from mathdown.utils.logger import get_logger
from mathdown.visitor import BaseRewriter

logger = get_logger(__name__)


class MathRewriter(BaseRewriter):
    """Rewrite a tree, turning ``$`` and ``$$`` notation into math nodes.

    Counts the nodes it produces in ``inline_count`` and ``block_count``.

    """

    def __init__(self) -> None:
        self.inline_count = 0
        self.block_count = 0

    def rewrite_paragraph(self, node: Paragraph) -> Node:
        code = block_math_code(node)
        if code is None:
            return self.rewrite_default(node)
        self.block_count += 1
        return BlockMath(location=node.location, code=code)

    def rewrite_child(self, child: Node) -> Sequence[Node]:
        if isinstance(child, Text):
            nodes = split_inline_math(child)
            self.inline_count += sum(isinstance(n, InlineMath) for n in nodes)
            return nodes
        return (self.rewrite(child),)


def parse_math(document: Document, config: ParseConfig | None = None) -> Document:
    """Apply the math pass to a parsed document.

    Args:
        document: Parsed document
        config: Configuration to consult; defaults to the active ParseConfig

    Returns:
        The rewritten document, or ``document`` itself when math is disabled
        or the document holds no math.
    """
    if config is None:
        config = get_parse_config()
    if not config.math_enabled:
        logger.debug("Math disabled, skipping math pass")
        return document

    rewriter = MathRewriter()
    result = rewriter.rewrite(document)
    if not isinstance(result, Document):
        msg = f"math pass must return a Document for the root, got {type(result).__name__}"
        raise TypeError(msg)
    logger.debug(
        "Math pass produced %d block and %d inline nodes",
        rewriter.block_count,
        rewriter.inline_count,
    )
    return result


__all__ = ["MathRewriter", "parse_math"]
