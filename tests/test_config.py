"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, plugin selection, and
config inheritance for sub-parsers.
"""

from threading import Thread

import pytest

from mathdown import (
    BUILTIN_PLUGINS,
    Markdown,
    ParseConfig,
    Parser,
    PluginError,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mathdown.nodes import BlockMath, BlockQuote, InlineMath


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.math_enabled is False
        assert config.source_positions is True

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.math_enabled = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"math_enabled": True, "tables_enabled": True})
        assert config == ParseConfig(math_enabled=True)


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_get(self) -> None:
        config = ParseConfig(math_enabled=True)
        set_parse_config(config)
        assert get_parse_config() is config

    def test_reset_restores_default(self) -> None:
        set_parse_config(ParseConfig(math_enabled=True))
        reset_parse_config()
        assert get_parse_config().math_enabled is False


class TestParseConfigContext:
    def test_context_sets_config(self) -> None:
        with parse_config_context(ParseConfig(math_enabled=True)):
            assert get_parse_config().math_enabled is True
        assert get_parse_config().math_enabled is False

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(math_enabled=True)):
            with parse_config_context(ParseConfig(source_positions=False)):
                assert get_parse_config() == ParseConfig(source_positions=False)
            assert get_parse_config() == ParseConfig(math_enabled=True)

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(math_enabled=True)):
                raise RuntimeError("boom")
        assert get_parse_config().math_enabled is False


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, bool] = {}

        def worker(thread_id: int, config: ParseConfig) -> None:
            set_parse_config(config)
            results[thread_id] = Parser("$x$")._config.math_enabled

        configs = [ParseConfig(math_enabled=True), ParseConfig(math_enabled=False)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: True, 1: False}

    def test_concurrent_markdown_instances(self) -> None:
        results: dict[int, str] = {}

        def worker(thread_id: int, with_math: bool) -> None:
            md = Markdown(plugins=["math"] if with_math else [])
            results[thread_id] = md("A $x$ B")

        threads = [
            Thread(target=worker, args=(0, True)),
            Thread(target=worker, args=(1, False)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert "language-math" in results[0]
        assert "language-math" not in results[1]


class TestParserConfigInheritance:
    """Test that sub-parsers inherit config via ContextVar."""

    def teardown_method(self) -> None:
        reset_parse_config()

    def test_parser_reads_from_contextvar(self) -> None:
        set_parse_config(ParseConfig(math_enabled=True))
        doc = Parser("$x$").parse_document()
        assert isinstance(doc.children[0].children[0], InlineMath)  # type: ignore[attr-defined]

    def test_quote_content_inherits_config(self) -> None:
        doc = Markdown(plugins=["math"], source_positions=False).parse("> $$x$$")
        quote = doc.children[0]
        assert isinstance(quote, BlockQuote)
        assert quote.children == (BlockMath(location=None, code="x"),)

    def test_parse_restores_previous_config(self) -> None:
        set_parse_config(ParseConfig(source_positions=False))
        parse("x", math=True)
        assert get_parse_config() == ParseConfig(source_positions=False)

    def test_parse_inherits_active_math_setting(self) -> None:
        set_parse_config(ParseConfig(math_enabled=True))
        assert isinstance(parse("$$x$$").children[0], BlockMath)

    def test_parse_flag_overrides_active_setting(self) -> None:
        set_parse_config(ParseConfig(math_enabled=True))
        assert not isinstance(parse("$$x$$", math=False).children[0], BlockMath)


class TestMarkdownPlugins:
    def test_no_plugins(self) -> None:
        assert Markdown().config == ParseConfig()

    def test_math_plugin(self) -> None:
        assert Markdown(plugins=["math"]).config.math_enabled is True

    def test_all_plugins(self) -> None:
        config = Markdown(plugins=["all"]).config
        for field in BUILTIN_PLUGINS.values():
            assert getattr(config, field) is True

    def test_unknown_plugin(self) -> None:
        with pytest.raises(PluginError) as exc_info:
            Markdown(plugins=["tables"])
        assert exc_info.value.plugin_name == "tables"

    def test_source_positions_flag(self) -> None:
        assert Markdown(source_positions=False).config.source_positions is False

    def test_call_does_not_leak_config(self) -> None:
        Markdown(plugins=["math"])("$x$")
        assert get_parse_config().math_enabled is False


class TestParserSlots:
    def test_parser_has_required_slots(self) -> None:
        for slot in ("_lines", "_tokens", "_pos", "_current", "_source_file"):
            assert slot in Parser.__slots__

    def test_parser_no_config_slots(self) -> None:
        assert not any("config" in slot or "enabled" in slot for slot in Parser.__slots__)
