"""Tests for the document-wide math pass.

Covers option gating, identity preservation when nothing changes,
idempotence, and recursion into every container kind.
"""

import logging

import pytest

from mathdown import ParseConfig, parse, parse_math
from mathdown.math import MathRewriter
from mathdown.nodes import (
    BlockMath,
    BlockQuote,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    InlineMath,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)

ENABLED = ParseConfig(math_enabled=True)


def _doc(*blocks) -> Document:  # type: ignore[no-untyped-def]
    return Document(location=None, children=tuple(blocks))


def _para(*inlines) -> Paragraph:  # type: ignore[no-untyped-def]
    return Paragraph(location=None, children=tuple(inlines))


def _text(content: str) -> Text:
    return Text(location=None, content=content)


class TestGating:
    def test_disabled_returns_same_document(self) -> None:
        doc = _doc(_para(_text("A $x$ B")))
        assert parse_math(doc, ParseConfig()) is doc

    def test_enabled_rewrites(self) -> None:
        doc = _doc(_para(_text("A $x$ B")))
        result = parse_math(doc, ENABLED)
        assert result.children[0].children[1] == InlineMath(None, "x")  # type: ignore[attr-defined]

    def test_uses_active_config_by_default(self) -> None:
        from mathdown import parse_config_context

        doc = _doc(_para(_text("$x$")))
        assert parse_math(doc) is doc
        with parse_config_context(ENABLED):
            assert parse_math(doc) is not doc

    def test_parse_without_math_has_no_math_nodes(self) -> None:
        doc = parse("$$\nx\n$$\n\nA $y$ B")
        assert all(isinstance(block, Paragraph) for block in doc.children)

    def test_disabled_logs_skip(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="mathdown"):
            parse_math(_doc(), ParseConfig())
        assert "Math disabled" in caplog.text


class TestIdentity:
    def test_document_without_math_is_identical(self) -> None:
        doc = _doc(
            Heading(location=None, level=1, children=(_text("Title"),)),
            _para(_text("cost $5"), SoftBreak(None), _text("plain")),
            BlockQuote(location=None, children=(_para(_text("quoted")),)),
            ThematicBreak(None),
        )
        assert parse_math(doc, ENABLED) is doc

    def test_untouched_siblings_keep_identity(self) -> None:
        plain = _para(_text("plain"))
        doc = _doc(plain, _para(_text("$x$")))
        result = parse_math(doc, ENABLED)
        assert result.children[0] is plain

    def test_idempotent(self) -> None:
        doc = parse("# $a$\n\n$$\nb\n$$\n\n> *c $d$* $e$f$", math=True)
        assert parse_math(doc, ENABLED) == doc

    def test_idempotent_on_escapes_as_written(self) -> None:
        doc = _doc(_para(_text(r"\$a\$ $b\,c$ \\$d$")))
        once = parse_math(doc, ENABLED)
        assert once.children[0].children[1] == InlineMath(None, r"b\,c")  # type: ignore[attr-defined]
        assert parse_math(once, ENABLED) == once

    def test_existing_math_nodes_untouched(self) -> None:
        doc = _doc(BlockMath.literal("x"), _para(InlineMath.literal("$y$")))
        assert parse_math(doc, ENABLED) is doc


class TestRecursion:
    def test_block_math_in_block_quote(self) -> None:
        inner = _para(_text("$$"), SoftBreak(None), _text("x"), SoftBreak(None), _text("$$"))
        doc = _doc(BlockQuote(location=None, children=(inner,)))
        result = parse_math(doc, ENABLED)
        assert result.children[0].children == (BlockMath(None, "x"),)  # type: ignore[attr-defined]

    def test_block_detection_takes_priority(self) -> None:
        doc = _doc(_para(_text("$$x$$")))
        assert parse_math(doc, ENABLED).children == (BlockMath(None, "x"),)

    def test_heading_not_block_math(self) -> None:
        doc = _doc(Heading(location=None, level=2, children=(_text("$$x$$"),)))
        result = parse_math(doc, ENABLED)
        assert isinstance(result.children[0], Heading)

    def test_inline_in_nested_emphasis(self) -> None:
        strong = Strong(None, (Emphasis(None, (_text("$x$"),)),))
        result = parse_math(_doc(_para(strong)), ENABLED)
        assert result.children[0].children[0].children[0].children == (  # type: ignore[attr-defined]
            InlineMath(None, "x"),
        )

    def test_fenced_code_untouched(self) -> None:
        code = FencedCode(location=None, code="$x$\n")
        doc = _doc(code)
        assert parse_math(doc, ENABLED).children[0] is code


class TestMathRewriterCounts:
    def test_counts(self) -> None:
        doc = _doc(
            _para(_text("$$"), SoftBreak(None), _text("x"), SoftBreak(None), _text("$$")),
            _para(_text("$a$ and $b$")),
        )
        rewriter = MathRewriter()
        rewriter.rewrite(doc)
        assert rewriter.block_count == 1
        assert rewriter.inline_count == 2

    def test_counts_start_at_zero(self) -> None:
        rewriter = MathRewriter()
        rewriter.rewrite(_doc(_para(_text("plain"))))
        assert (rewriter.block_count, rewriter.inline_count) == (0, 0)


class TestRootCheck:
    def test_non_document_root_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(MathRewriter, "rewrite_document", lambda self, node: _para())
        with pytest.raises(TypeError, match="Document"):
            parse_math(_doc(), ENABLED)
