"""Tests for inline math splitting.

Covers the splitter on hand-built Text leaves, the full parse path with math
enabled, and the source ranges of the produced fragments.
"""

from mathdown import Document, Paragraph, extract_text, format_markdown, parse, render
from mathdown.location import SourceLocation
from mathdown.math.inline import split_inline_math
from mathdown.nodes import CodeSpan, Emphasis, Heading, InlineMath, Text

LOC = SourceLocation(lineno=1, col_offset=1, end_lineno=1, end_col_offset=8)


def _text(content: str, location: SourceLocation | None = None) -> Text:
    return Text(location=location, content=content)


def _inlines(source: str) -> tuple:  # type: ignore[type-arg]
    para = parse(source, math=True).children[0]
    assert isinstance(para, Paragraph)
    return para.children


def _math(children: tuple) -> list[InlineMath]:  # type: ignore[type-arg]
    return [child for child in children if isinstance(child, InlineMath)]


# =============================================================================
# Splitter
# =============================================================================


class TestSplitInlineMath:
    def test_no_math_returns_identical_leaf(self) -> None:
        leaf = _text("no math here")
        result = split_inline_math(leaf)
        assert result == (leaf,)
        assert result[0] is leaf

    def test_unmatched_opener_returns_identical_leaf(self) -> None:
        leaf = _text("costs $5 today")
        assert split_inline_math(leaf)[0] is leaf

    def test_surrounding_text(self) -> None:
        assert split_inline_math(_text("A $x$ B")) == (
            _text("A "),
            InlineMath(None, "x"),
            _text(" B"),
        )

    def test_whole_leaf(self) -> None:
        assert split_inline_math(_text("$x$")) == (InlineMath(None, "x"),)

    def test_adjacent_spans(self) -> None:
        assert split_inline_math(_text("$a$ $b$")) == (
            InlineMath(None, "a"),
            _text(" "),
            InlineMath(None, "b"),
        )

    def test_leftmost_opener_takes_first_closer(self) -> None:
        # The middle $ follows a space so it cannot close
        assert split_inline_math(_text("$a $b$")) == (InlineMath(None, "a $b"),)

    def test_span_after_unopenable_dollar(self) -> None:
        assert split_inline_math(_text("$ a $b$")) == (_text("$ a "), InlineMath(None, "b"))

    def test_code_keeps_inner_whitespace(self) -> None:
        assert split_inline_math(_text("$x  +  y$")) == (InlineMath(None, "x  +  y"),)

    def test_code_keeps_escapes_as_written(self) -> None:
        assert split_inline_math(_text(r"$a\,b + \{x\}$")) == (InlineMath(None, r"a\,b + \{x\}"),)

    def test_escaped_dollar_is_never_a_delimiter(self) -> None:
        leaf = _text(r"\$x$")
        assert split_inline_math(leaf)[0] is leaf
        assert split_inline_math(_text(r"$a\$b$")) == (InlineMath(None, r"a\$b"),)

    def test_escaped_backslash_still_escapes_dollar(self) -> None:
        leaf = _text(r"\\$x$")
        assert split_inline_math(leaf)[0] is leaf

    def test_fragments_keep_escapes_as_written(self) -> None:
        assert split_inline_math(_text(r"\*a $x$ \_")) == (
            _text(r"\*a "),
            InlineMath(None, "x"),
            _text(r" \_"),
        )

    def test_no_adjacent_text_nodes(self) -> None:
        result = split_inline_math(_text("a $x$ b $ c $y$"))
        for left, right in zip(result, result[1:], strict=False):
            assert not (isinstance(left, Text) and isinstance(right, Text))

    def test_sub_ranges(self) -> None:
        result = split_inline_math(_text("A $xy$ B", LOC.slice_columns(0, 8)))
        assert [node.location for node in result] == [
            SourceLocation(1, 1, 1, 3),
            SourceLocation(1, 3, 1, 7),
            SourceLocation(1, 7, 1, 9),
        ]

    def test_sub_ranges_count_utf8_bytes(self) -> None:
        leaf = _text("é $x$", SourceLocation(1, 1, 1, 7))
        text, math = split_inline_math(leaf)
        assert text.location == SourceLocation(1, 1, 1, 4)
        assert math.location == SourceLocation(1, 4, 1, 7)

    def test_no_sub_ranges_for_multi_line_leaf(self) -> None:
        leaf = _text("A $x$", SourceLocation(1, 1, 2, 3))
        assert all(node.location is None for node in split_inline_math(leaf))

    def test_no_sub_ranges_without_location(self) -> None:
        assert all(node.location is None for node in split_inline_math(_text("A $x$")))


# =============================================================================
# Parsing with math enabled
# =============================================================================


class TestInlineMathParsing:
    def test_one_span(self) -> None:
        children = _inlines("The sum is $x + y$.")
        assert len(children) == 3
        assert children[0].content == "The sum is "
        assert children[1].code == "x + y"
        assert children[2].content == "."

    def test_two_spans(self) -> None:
        children = _inlines("A $x$ and $y$.")
        assert len(children) == 5
        assert [m.code for m in _math(children)] == ["x", "y"]

    def test_option_off(self) -> None:
        para = parse("The sum is $x + y$.").children[0]
        assert para.children == (Text(para.children[0].location, "The sum is $x + y$."),)

    def test_escaped_dollars_stay_text(self) -> None:
        children = _inlines(r"Escaped \$x$ and $y\$ stay text.")
        assert _math(children) == []
        assert children[0].content == "Escaped $x$ and $y$ stay text."

    def test_dollars_after_escaped_backslash_stay_text(self) -> None:
        children = _inlines(r"Escaped \\$x$ and $y\\$ stay text.")
        assert _math(children) == []
        assert children[0].content == r"Escaped \$x$ and $y\$ stay text."

    def test_latex_escapes_survive(self) -> None:
        children = _inlines(r"A $a\,b$ and $\{x\}$ and $a \\ b$.")
        assert [m.code for m in _math(children)] == [r"a\,b", r"\{x\}", r"a \\ b"]

    def test_text_escapes_resolved_around_math(self) -> None:
        children = _inlines(r"\*a\* costs \$5 and $x$ \_")
        assert children[0].content == "*a* costs $5 and "
        assert children[1].code == "x"
        assert children[2].content == " _"

    def test_escaped_dollar_renders_as_dollar(self) -> None:
        doc = parse(r"It costs \$5 and $x$.", math=True)
        assert render(doc) == '<p>It costs $5 and <code class="language-math">x</code>.</p>\n'
        assert extract_text(doc) == "It costs $5 and $x$."

    def test_escaped_dollar_without_math_is_plain(self) -> None:
        para = parse(r"costs \$5").children[0]
        assert para.children[0].content == "costs $5"

    def test_whitespace_after_opener(self) -> None:
        assert _math(_inlines("A $ x$ B")) == []

    def test_whitespace_before_closer(self) -> None:
        assert _math(_inlines("A $x $ B")) == []

    def test_unmatched_opener(self) -> None:
        assert _math(_inlines("A $x + y.")) == []

    def test_unmatched_closer(self) -> None:
        assert _math(_inlines("A x + y$.")) == []

    def test_no_span_across_lines(self) -> None:
        assert _math(_inlines("A $x\n+ y$")) == []

    def test_double_dollar_inside_span(self) -> None:
        children = _inlines("$x$$y$")
        assert len(children) == 1
        assert children[0].code == "x$$y"

    def test_inside_emphasis(self) -> None:
        children = _inlines("*a $x$* and `$y$`")
        emphasis = children[0]
        assert isinstance(emphasis, Emphasis)
        assert [m.code for m in _math(emphasis.children)] == ["x"]
        code = children[-1]
        assert isinstance(code, CodeSpan)
        assert code.code == "$y$"

    def test_inside_heading(self) -> None:
        heading = parse("# Sum $x + y$", math=True).children[0]
        assert isinstance(heading, Heading)
        assert [m.code for m in _math(heading.children)] == ["x + y"]

    def test_in_each_line_of_a_paragraph(self) -> None:
        children = _inlines("first $a$\nsecond $b$")
        assert [m.code for m in _math(children)] == ["a", "b"]


class TestInlineMathRanges:
    def test_whole_line(self) -> None:
        math = _inlines("$x$")[0]
        assert math.location == SourceLocation(1, 1, 1, 4)

    def test_between_text(self) -> None:
        children = _inlines("A $xy$ B")
        assert isinstance(children[1], InlineMath)
        assert children[1].location == SourceLocation(1, 3, 1, 7)

    def test_after_escaped_character(self) -> None:
        children = _inlines(r"a \*b $x$")
        assert children[0] == Text(SourceLocation(1, 1, 1, 7), "a *b ")
        assert children[1].location == SourceLocation(1, 7, 1, 10)

    def test_second_line(self) -> None:
        children = _inlines("first\nA $x$")
        assert children[-1].location == SourceLocation(2, 3, 2, 6)

    def test_inside_block_quote(self) -> None:
        quote = parse("> A $x$", math=True).children[0]
        math = quote.children[0].children[1]  # type: ignore[attr-defined]
        assert math.location == SourceLocation(1, 5, 1, 8)

    def test_source_file_carried(self) -> None:
        doc = parse("$x$", source_file="docs/math.md", math=True)
        assert doc.children[0].children[0].location.source_file == "docs/math.md"  # type: ignore[attr-defined]

    def test_no_ranges_without_source_positions(self) -> None:
        from mathdown import Markdown

        doc = Markdown(plugins=["math"], source_positions=False).parse("A $x$ B")
        assert all(child.location is None for child in doc.children[0].children)  # type: ignore[attr-defined]


class TestInlineMathOutput:
    def test_format(self) -> None:
        doc = Document(
            location=None,
            children=(
                Paragraph(None, (Text(None, "A "), InlineMath.literal("x + y"), Text(None, " B"))),
            ),
        )
        assert format_markdown(doc) == "A $x + y$ B\n"
        assert render(doc) == '<p>A <code class="language-math">x + y</code> B</p>\n'

    def test_latex_escapes_round_trip(self) -> None:
        for code in (r"a\,b", r"\{x\}", r"a \\ b", r"\frac{a}{b}"):
            doc = Document(
                location=None,
                children=(Paragraph(None, (Text(None, "A "), InlineMath.literal(code), Text(None, " B"))),),
            )
            reparsed = parse(format_markdown(doc), math=True)
            assert [m.code for m in _math(reparsed.children[0].children)] == [code]  # type: ignore[attr-defined]

    def test_literal_dollar_text_round_trips(self) -> None:
        doc = Document(location=None, children=(Paragraph(None, (Text(None, "costs $5 and $x$"),)),))
        reparsed = parse(format_markdown(doc), math=True)
        assert [child.content for child in reparsed.children[0].children] == ["costs $5 and $x$"]  # type: ignore[attr-defined]
