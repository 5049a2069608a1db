"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, thread isolation and the context manager
the engine uses to publish its config during a parse.
"""

from threading import Thread

import pytest

from markymark import (
    BlockQuote,
    ConfigError,
    Italic,
    MarkyMark,
    Paragraph,
    ParseConfig,
    Parser,
    PlainText,
    get_flavor,
    get_parse_config,
    parse_config_context,
    parse_markdown,
    reset_parse_config,
    set_parse_config,
)


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.max_nesting == 32
        assert config.tab_width == 4
        assert config.hard_line_breaks is True

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.tab_width = 2  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["max_nesting", "tab_width"])
    def test_rejects_values_below_one(self, field: str) -> None:
        with pytest.raises(ConfigError, match=field):
            ParseConfig(**{field: 0})

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"tab_width": 2, "unknown": True})

        assert config.tab_width == 2
        assert config.max_nesting == 32


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def test_set_and_reset(self) -> None:
        custom = ParseConfig(tab_width=8)
        try:
            set_parse_config(custom)
            assert get_parse_config() is custom
        finally:
            reset_parse_config()
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores_previous(self) -> None:
        outer = ParseConfig(tab_width=2)
        inner = ParseConfig(tab_width=3)
        with parse_config_context(outer):
            with parse_config_context(inner):
                assert get_parse_config() is inner
            assert get_parse_config() is outer
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(ValueError), parse_config_context(ParseConfig(tab_width=2)):
            raise ValueError("boom")
        assert get_parse_config().tab_width == 4

    def test_thread_isolation(self) -> None:
        """A config set in one thread is invisible to another."""
        seen: list[int] = []

        def worker() -> None:
            seen.append(get_parse_config().tab_width)

        with parse_config_context(ParseConfig(tab_width=7)):
            thread = Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == [4]

    def test_engine_does_not_leak_config(self) -> None:
        MarkyMark(config=ParseConfig(tab_width=2)).parse_markdown("text")

        assert get_parse_config() == ParseConfig()


class TestConfigEffects:
    """Settings change parse results."""

    def test_hard_line_breaks_off(self) -> None:
        para = parse_markdown("one\ntwo", config=ParseConfig(hard_line_breaks=False))[0]

        assert para.children == (PlainText(raw="one\ntwo", content="one\ntwo"),)

    def test_tab_width_controls_nesting(self) -> None:
        """With tab_width=2 a tab indents past a two-column marker."""
        source = "- a\n\t- b"

        narrow = parse_markdown(source, config=ParseConfig(tab_width=2))[0]

        assert narrow.children[0].nested[0].children[0].content == "b"

    def test_block_nesting_limit(self) -> None:
        """Past the limit, quote content degrades to plain paragraphs."""
        items = parse_markdown("> > > *deep*", config=ParseConfig(max_nesting=2))

        level1 = items[0]
        level2 = level1.children[0]
        level3 = level2.children[0]
        assert isinstance(level3, BlockQuote)
        para = level3.children[0]
        assert isinstance(para, Paragraph)
        assert para.children == (PlainText(raw="*deep*", content="*deep*"),)

    def test_within_limit_keeps_structure(self) -> None:
        items = parse_markdown("> > > *deep*", config=ParseConfig(max_nesting=3))

        para = items[0].children[0].children[0].children[0]
        assert isinstance(para.children[0], Italic)

    def test_inline_nesting_limit(self) -> None:
        with parse_config_context(ParseConfig(max_nesting=4)):
            parser = Parser(get_flavor("contentful"), inline_depth=5)
            items = parser.parse_inline("*x*")

        assert items == (PlainText(raw="*x*", content="*x*"),)

    def test_pathological_nesting_is_bounded(self) -> None:
        """Deep quotes do not exhaust the interpreter stack."""
        items = parse_markdown("> " * 2000 + "x")

        assert len(items) == 1
        assert isinstance(items[0], BlockQuote)
