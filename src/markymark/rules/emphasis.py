"""Emphasis rules: bold, italic and strikethrough.

Delimiter-paired rules cannot be a single lazy regex: from every opener
without a closer such a pattern rescans to the end of the text, which is
quadratic on input like ``"*a " * n``. Instead each rule indexes the
positions of its openers and closers once per ``parse_inline`` call and
pairs them by binary search.

Pairing:
An opener at ``i`` pairs with the first closer at or after
``i + width + 1`` (content is never empty). If the first opener at or
after the cursor has no closer, no later opener has one either, so the
search ends there.

Thread Safety:
Rules are stateless. A DelimiterIndex belongs to one ``parse_inline`` call.

"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from markymark.nodes import Bold, Italic, MarkDownItem, Strikethrough
from markymark.rules.protocol import Phase

if TYPE_CHECKING:
    from markymark.parser import Parser


@dataclass(frozen=True, slots=True)
class Delimiter:
    """One delimiter kind of an emphasis rule.

    Attributes:
        opener: Zero-width pattern matching where an opening run starts
        closer: Zero-width pattern matching where a closing run starts
        width: Length of the delimiter run

    """

    opener: re.Pattern[str]
    closer: re.Pattern[str]
    width: int


@dataclass(frozen=True, slots=True)
class DelimiterSpan:
    """A paired opener and closer inside ``text``."""

    text: str
    opener: int
    closer: int
    width: int

    def start(self) -> int:
        return self.opener

    def end(self) -> int:
        return self.closer + self.width

    @property
    def raw(self) -> str:
        return self.text[self.opener : self.closer + self.width]

    @property
    def content(self) -> str:
        return self.text[self.opener + self.width : self.closer]


class DelimiterIndex:
    """Opener and closer positions of one text, per delimiter kind.

    Usage:
        >>> from markymark.rules import ItalicRule
        >>> index = DelimiterIndex("a *b* c", ItalicRule.delimiters)
        >>> index.search(0).content
        'b'

    Complexity:
        - construction: O(n), one regex pass per pattern
        - search(): O(k log n) for k delimiter kinds

    """

    __slots__ = ("_text", "_delimiters", "_openers", "_closers")

    def __init__(self, text: str, delimiters: tuple[Delimiter, ...]) -> None:
        self._text = text
        self._delimiters = delimiters
        self._openers = [[m.start() for m in d.opener.finditer(text)] for d in delimiters]
        self._closers = [[m.start() for m in d.closer.finditer(text)] for d in delimiters]

    def search(self, pos: int) -> DelimiterSpan | None:
        """Leftmost paired span starting at or after ``pos``."""
        best: DelimiterSpan | None = None
        for delimiter, openers, closers in zip(self._delimiters, self._openers, self._closers):
            k = bisect_left(openers, pos)
            if k == len(openers):
                continue
            opener = openers[k]
            if best is not None and opener >= best.opener:
                continue
            c = bisect_left(closers, opener + delimiter.width + 1)
            if c == len(closers):
                continue
            best = DelimiterSpan(self._text, opener, closers[c], delimiter.width)
        return best


class DelimiterRule:
    """Base for inline rules built from paired delimiter runs.

    Subclasses set ``delimiters`` and implement ``build``; the wrapped text
    is available as ``span.content``.

    """

    phase: ClassVar[Phase] = Phase.INLINE
    name: ClassVar[str] = "delimiter"
    delimiters: ClassVar[tuple[Delimiter, ...]]

    def searcher(self, text: str) -> DelimiterIndex:
        """Index ``text`` once; the parser calls the result's ``search``."""
        return DelimiterIndex(text, self.delimiters)

    def search(self, text: str, pos: int) -> DelimiterSpan | None:
        return self.searcher(text).search(pos)

    def matches(self, span: str) -> bool:
        """Whether ``span`` begins with this construct."""
        found = self.search(span, 0)
        return found is not None and found.start() == 0

    def extract(self, match: DelimiterSpan, parser: Parser) -> MarkDownItem:  # type: ignore[override]
        return self.build(match, parser)

    def build(self, span: DelimiterSpan, parser: Parser) -> MarkDownItem:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _delimiter(opener: str, closer: str, width: int) -> Delimiter:
    return Delimiter(re.compile(opener), re.compile(closer), width)


class BoldRule(DelimiterRule):
    """``**text**`` or ``__text__``."""

    name = "bold"
    delimiters = (
        _delimiter(r"(?=\*\*\S)", r"(?<=\S)(?=\*\*(?!\*))", 2),
        _delimiter(r"(?<!\w)(?=__\S)", r"(?<=\S)(?=__(?!\w))", 2),
    )

    def build(self, span: DelimiterSpan, parser: Parser) -> MarkDownItem:
        text = span.content
        return Bold(raw=span.raw, content=text, children=parser.parse_inline(text))


class ItalicRule(DelimiterRule):
    """``*text*`` or ``_text_`` (underscores never split a word)."""

    name = "italic"
    delimiters = (
        _delimiter(r"(?=\*[^\s*])", r"(?<=[^\s*])(?=\*(?!\*))", 1),
        _delimiter(r"(?<!\w)(?=_[^\s_])", r"(?<=[^\s_])(?=_(?!\w))", 1),
    )

    def build(self, span: DelimiterSpan, parser: Parser) -> MarkDownItem:
        text = span.content
        return Italic(raw=span.raw, content=text, children=parser.parse_inline(text))


class StrikethroughRule(DelimiterRule):
    """``~~text~~``"""

    name = "strikethrough"
    delimiters = (_delimiter(r"(?=~~\S)", r"(?<=\S)(?=~~)", 2),)

    def build(self, span: DelimiterSpan, parser: Parser) -> MarkDownItem:
        text = span.content
        return Strikethrough(raw=span.raw, content=text, children=parser.parse_inline(text))
