"""Tests for mathdown utilities: logger, StringBuilder, errors, location."""

import pytest

from mathdown.errors import MathdownError, NodeTypeMismatchError, PluginError, RenderError
from mathdown.location import SourceLocation, utf8_len
from mathdown.stringbuilder import StringBuilder


class TestLogger:
    """Tests for logger module."""

    def test_get_logger(self) -> None:
        from mathdown.utils.logger import get_logger

        assert get_logger("mymodule").name == "mathdown.mymodule"

    def test_logger_with_mathdown_prefix(self) -> None:
        from mathdown.utils.logger import get_logger

        assert get_logger("mathdown.math.rewriter").name == "mathdown.math.rewriter"

    def test_name_starting_with_mathdown_not_submodule(self) -> None:
        from mathdown.utils.logger import get_logger

        assert get_logger("mathdown_other").name == "mathdown.mathdown_other"

    def test_exact_mathdown_name(self) -> None:
        from mathdown.utils.logger import get_logger

        assert get_logger("mathdown").name == "mathdown"

    def test_all_exports_importable(self) -> None:
        import mathdown.utils as utils

        for name in utils.__all__:
            assert hasattr(utils, name), f"{name} in __all__ but not importable"


class TestStringBuilder:
    def test_append_chain(self) -> None:
        sb = StringBuilder()
        sb.append("a").append("b").append_line("c").append_line()
        assert sb.build() == "abc\n\n"

    def test_bool(self) -> None:
        sb = StringBuilder()
        assert not sb
        sb.append("x")
        assert sb


class TestSourceLocation:
    def test_str(self) -> None:
        assert str(SourceLocation(3, 5)) == "3:5"
        assert str(SourceLocation(3, 5, source_file="a.md")) == "a.md:3:5"

    def test_single_line(self) -> None:
        assert SourceLocation(1, 1, 1, 4).is_single_line
        assert SourceLocation(1, 1).is_single_line
        assert not SourceLocation(1, 1, 2, 1).is_single_line

    def test_span_to(self) -> None:
        start = SourceLocation(1, 1, 1, 3, "a.md")
        end = SourceLocation(3, 1, 3, 4)
        assert start.span_to(end) == SourceLocation(1, 1, 3, 4, "a.md")

    def test_slice_columns(self) -> None:
        loc = SourceLocation(2, 5, 2, 20, "a.md")
        assert loc.slice_columns(2, 6) == SourceLocation(2, 7, 2, 11, "a.md")

    def test_utf8_len(self) -> None:
        assert utf8_len("abc") == 3
        assert utf8_len("é") == 2
        assert utf8_len("∑") == 3


class TestErrors:
    """Tests for error classes."""

    def test_base_error(self) -> None:
        assert str(MathdownError("Something went wrong")) == "Something went wrong"

    def test_render_error(self) -> None:
        error = RenderError("html", "Table")
        assert isinstance(error, MathdownError)
        assert "Table" in str(error)
        assert "html" in str(error)

    def test_plugin_error(self) -> None:
        error = PluginError("tables", "unknown plugin")
        assert "tables" in str(error)
        assert error.plugin_name == "tables"

    def test_node_type_mismatch(self) -> None:
        error = NodeTypeMismatchError("InlineMath", "BlockMath")
        assert (error.expected, error.actual) == ("InlineMath", "BlockMath")
        with pytest.raises(TypeError):
            raise error
