"""AST Visitor, Transformer and Rewriter for mathdown.

Provides a base visitor class with match-based dispatch, an immutable
bottom-up transform function, and a top-down rewriter base class for
passes that replace one node with zero or more nodes.

Example (collect all inline math):

    class MathCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.expressions: list[str] = []

        def visit_inline_math(self, node: InlineMath) -> None:
            self.expressions.append(node.code)

    collector = MathCollector()
    collector.visit(doc)

Example (shift heading levels):

    def shift_headings(node: Node) -> Node:
        if isinstance(node, Heading):
            new_level = min(node.level + 1, 6)
            return dataclasses.replace(node, level=new_level)
        return node

    new_doc = transform(doc, shift_headings)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure and safe to call from any thread.

"""

from collections.abc import Callable, Sequence

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
    children_of,
    with_children,
)


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        for child in children_of(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_fenced_code(self, node: FencedCode) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_thematic_break(self, node: ThematicBreak) -> T:
        return self.visit_default(node)

    def visit_block_math(self, node: BlockMath) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_line_break(self, node: LineBreak) -> T:
        return self.visit_default(node)

    def visit_soft_break(self, node: SoftBreak) -> T:
        return self.visit_default(node)

    def visit_inline_math(self, node: InlineMath) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case FencedCode():
                return self.visit_fenced_code(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case ThematicBreak():
                return self.visit_thematic_break(node)
            case BlockMath():
                return self.visit_block_math(node)
            case Text():
                return self.visit_text(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case LineBreak():
                return self.visit_line_break(node)
            case SoftBreak():
                return self.visit_soft_break(node)
            case InlineMath():
                return self.visit_inline_math(node)
            case _:
                return self.visit_default(node)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children. This ensures ``fn``
    always receives nodes with already-transformed children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Since all nodes are frozen dataclasses, this produces a new immutable tree.
    The original tree is untouched.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    children = children_of(node)
    if children:
        new_children = tuple(
            result for child in children if (result := _transform_node(child, fn)) is not None
        )
        if new_children != children:
            node = with_children(node, new_children)
    return fn(node)


class BaseRewriter:
    """Top-down tree rewriter.

    ``rewrite`` dispatches on the node type to a ``rewrite_*`` method. The
    default for every container rewrites its children with ``rewrite_child``,
    which may expand one child into several nodes (or none). Leaves are
    returned unchanged.

    A container whose children all come back as the identical objects is
    returned as-is, so a rewrite that changes nothing allocates nothing and
    preserves node identity.

    """

    def rewrite(self, node: Node) -> Node:
        """Rewrite one node (and, by default, its subtree)."""
        match node:
            case Document():
                return self.rewrite_document(node)
            case Paragraph():
                return self.rewrite_paragraph(node)
            case Text():
                return self.rewrite_text(node)
            case InlineMath():
                return self.rewrite_inline_math(node)
            case BlockMath():
                return self.rewrite_block_math(node)
            case _:
                return self.rewrite_default(node)

    def rewrite_document(self, node: Document) -> Node:
        return self.rewrite_default(node)

    def rewrite_paragraph(self, node: Paragraph) -> Node:
        return self.rewrite_default(node)

    def rewrite_text(self, node: Text) -> Node:
        return self.rewrite_default(node)

    def rewrite_inline_math(self, node: InlineMath) -> Node:
        return self.rewrite_default(node)

    def rewrite_block_math(self, node: BlockMath) -> Node:
        return self.rewrite_default(node)

    def rewrite_child(self, child: Node) -> Sequence[Node]:
        """Rewrite a child node into its replacement sequence."""
        return (self.rewrite(child),)

    def rewrite_default(self, node: Node) -> Node:
        """Rebuild a container from its rewritten children."""
        children = children_of(node)
        if not children:
            return node

        new_children: list[Node] = []
        changed = False
        for child in children:
            replacement = self.rewrite_child(child)
            if len(replacement) != 1 or replacement[0] is not child:
                changed = True
            new_children.extend(replacement)

        if not changed:
            return node
        return with_children(node, tuple(new_children))
