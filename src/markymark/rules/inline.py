"""Inline rules: escapes, code spans, images, links, line breaks.

Order matters and is fixed by the flavor: at the same start offset the
earlier rule wins, so code spans shield their content from emphasis and
images take precedence over links.

Links hand their text back to ``parser.parse_inline``, so a link may hold
emphasis or an image. Bold, italic and strikethrough live in
markymark.rules.emphasis.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from markymark.config import get_parse_config
from markymark.nodes import (
    Image,
    InlineCode,
    LineBreak,
    Link,
    MarkDownItem,
    PlainText,
)
from markymark.rules.protocol import RegexInlineRule

if TYPE_CHECKING:
    from markymark.parser import Parser

# Destination and optional "title" shared by links and images
_TARGET = r"\([ \t]*<?(?P<url>[^\s<>()]*)>?(?:[ \t]+\"(?P<title>[^\"]*)\")?[ \t]*\)"


class EscapeRule(RegexInlineRule):
    """Backslash escape of ASCII punctuation, kept as literal text."""

    name = "escape"
    pattern = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        return PlainText(raw=match.group(0), content=match.group(1))


class InlineCodeRule(RegexInlineRule):
    """Code span delimited by equal-length backtick runs."""

    name = "inline_code"
    pattern = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        content = match.group(2)
        if len(content) > 2 and content[0] == " " and content[-1] == " " and content.strip():
            content = content[1:-1]
        return InlineCode(raw=match.group(0), content=content)


class ImageRule(RegexInlineRule):
    """``![alt](url "title")``"""

    name = "image"
    pattern = re.compile(r"!\[(?P<alt>[^\]\n]*)\]" + _TARGET)

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        return Image(
            raw=match.group(0),
            url=match.group("url"),
            alt_text=match.group("alt"),
            title=match.group("title"),
        )


class LinkRule(RegexInlineRule):
    """``[text](url "title")``; the text may hold one level of brackets."""

    name = "link"
    pattern = re.compile(
        r"\[(?P<text>(?:\\.|[^\[\]\\]|\[(?:\\.|[^\[\]\\])*\])*)\]" + _TARGET,
        re.DOTALL,
    )

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        text = match.group("text")
        return Link(
            raw=match.group(0),
            content=text,
            children=parser.parse_inline(text),
            url=match.group("url"),
            title=match.group("title"),
        )


class LineBreakRule(RegexInlineRule):
    """Line break inside a paragraph.

    Backslash-newline and two or more trailing spaces always break. A bare
    newline breaks too while ``ParseConfig.hard_line_breaks`` is on;
    otherwise it stays in the surrounding plain text.
    """

    name = "line_break"
    pattern = re.compile(r"(?:\\|[ \t]*)\n")
    explicit_pattern = re.compile(r"(?:\\| {2,})\n")

    def search(self, text: str, pos: int) -> re.Match[str] | None:
        if get_parse_config().hard_line_breaks:
            return self.pattern.search(text, pos)
        return self.explicit_pattern.search(text, pos)

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        return LineBreak(raw=match.group(0))
