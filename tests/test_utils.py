"""Tests for the text helpers, logger and StringBuilder."""

import logging

import pytest

from markymark.stringbuilder import StringBuilder
from markymark.utils.logger import get_logger
from markymark.utils.text import html_escape, slugify


class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello World", "hello-world"),
            ("Hello World!", "hello-world"),
            ("Test & Code", "test-code"),
            ("  spaced  out  ", "spaced-out"),
            ("already-slugged", "already-slugged"),
            ("Café", "café"),
            ("", ""),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    def test_custom_separator(self) -> None:
        assert slugify("a b c", separator="_") == "a_b_c"


class TestHtmlEscape:
    def test_escapes_markup(self) -> None:
        assert html_escape('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_single_quote_kept(self) -> None:
        assert html_escape("it's") == "it's"


class TestGetLogger:
    def test_prefixes_name(self) -> None:
        assert get_logger("mymodule").name == "markymark.mymodule"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("markymark.parser").name == "markymark.parser"
        assert get_logger("markymark").name == "markymark"

    def test_outside_names_nest_under_package(self) -> None:
        package = get_logger("markymark")

        assert get_logger("mentions").parent is package

    def test_debug_logging_on_add_rule(self, caplog: pytest.LogCaptureFixture) -> None:
        from markymark import MarkyMark
        from markymark.rules import BoldRule

        with caplog.at_level(logging.DEBUG, logger="markymark"):
            MarkyMark().add_rule(BoldRule())

        assert any("bold" in record.getMessage() for record in caplog.records)


class TestStringBuilder:
    def test_chaining(self) -> None:
        sb = StringBuilder()

        assert sb.append("a").append("b").append("c") is sb
        assert sb.build() == "abc"

    def test_empty_fragments_skipped(self) -> None:
        sb = StringBuilder().append("").append("x").append("")

        assert sb.build() == "x"

    def test_empty_builder(self) -> None:
        assert StringBuilder().build() == ""
