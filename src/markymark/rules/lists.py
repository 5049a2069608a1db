"""List rules: unordered (``-``), ordered (``1.``) and alphabetical (``a.``).

A list is a run of sibling items that share a marker family. For every item:

- the marker line's text starts the item's inline content
- lines indented past the marker column continue the item's text until
  the first indented line that opens a block of its own (typically a
  nested marker); from there on the indented region is dedented and parsed
  recursively into ``ListItem.nested``
- a blank line ends the list, unless the next non-blank line is a sibling
  marker or more indented content for the current item

An empty marker line (``-``) yields an item with no content.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar

from markymark.nodes import Block, List, ListItem, ListType
from markymark.rules.protocol import BaseBlockRule, Extraction
from markymark.tokenizer import Line, join_lines, span_location

if TYPE_CHECKING:
    from markymark.parser import Parser


def _next_non_blank(lines: Sequence[Line], index: int) -> int | None:
    while index < len(lines):
        if not lines[index].is_blank:
            return index
        index += 1
    return None


class ListRule(BaseBlockRule):
    """Shared list parsing; subclasses supply the marker pattern.

    ``marker_pattern`` must define the named groups ``marker`` and
    ``content``. ``start_value`` derives the list's first ordinal.
    """

    name = "list"
    list_type: ClassVar[ListType] = ListType.UNORDERED
    marker_pattern: ClassVar[re.Pattern[str]]

    def start_value(self, match: re.Match[str]) -> int:
        return 1

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return self.marker_pattern.match(lines[index].text) is not None

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        tab_width = parser.config.tab_width
        base_indent = lines[index].indent(tab_width)
        first = self.marker_pattern.match(lines[index].text)
        assert first is not None

        items: list[ListItem] = []
        pos = index
        list_end = index + 1
        while pos < len(lines):
            match = first if pos == index else self._sibling(lines, pos, base_indent, parser)
            if match is None:
                break
            item, pos = self._item(lines, pos, match, base_indent, parser)
            items.append(item)
            list_end = pos

            # Blank lines only stay inside the list when a sibling follows
            if pos < len(lines) and lines[pos].is_blank:
                following = _next_non_blank(lines, pos)
                if following is None:
                    break
                if self._sibling(lines, following, base_indent, parser) is None:
                    break
                pos = following

        while list_end > index + 1 and lines[list_end - 1].is_blank:
            list_end -= 1
        item = List(
            raw=join_lines(lines[index:list_end]),
            location=span_location(lines, index, list_end),
            children=tuple(items),
            list_type=self.list_type,
            depth=parser.list_depth,
            start=self.start_value(first),
        )
        return Extraction(item, pos)

    def _sibling(
        self, lines: Sequence[Line], index: int, base_indent: int, parser: Parser
    ) -> re.Match[str] | None:
        """Marker match for a sibling item, unless an earlier rule claims the line."""
        if lines[index].indent(parser.config.tab_width) > base_indent:
            return None
        if parser.match_rule(lines, index) is not self:
            return None
        return self.marker_pattern.match(lines[index].text)

    def _item(
        self,
        lines: Sequence[Line],
        index: int,
        match: re.Match[str],
        base_indent: int,
        parser: Parser,
    ) -> tuple[ListItem, int]:
        tab_width = parser.config.tab_width
        text_parts = [match.group("content") or ""]
        nested: list[Line] = []
        pos = index + 1
        while pos < len(lines):
            line = lines[pos]
            if line.is_blank:
                following = _next_non_blank(lines, pos)
                if following is None or lines[following].indent(tab_width) <= base_indent:
                    break
                if not nested and not self._opens_block(lines[following], parser):
                    break
                nested.extend(lines[pos:following])
                pos = following
                continue
            if line.indent(tab_width) <= base_indent:
                break
            if nested or self._opens_block(line, parser):
                nested.append(line)
            else:
                text_parts.append(line.text.strip())
            pos += 1

        end = pos
        while end > index + 1 and lines[end - 1].is_blank:
            end -= 1

        content = "\n".join(text_parts).strip()
        item = ListItem(
            raw=join_lines(lines[index:end]),
            location=span_location(lines, index, end),
            content=content,
            children=parser.parse_inline(content),
            nested=self._parse_nested(nested, parser),
            marker=match.group("marker"),
        )
        return item, pos

    def _opens_block(self, line: Line, parser: Parser) -> bool:
        flush = line.dedent(line.indent(parser.config.tab_width), parser.config.tab_width)
        return parser.interrupts((flush,), 0)

    def _parse_nested(self, nested: list[Line], parser: Parser) -> tuple[Block, ...]:
        if not nested:
            return ()
        tab_width = parser.config.tab_width
        columns = min(line.indent(tab_width) for line in nested if not line.is_blank)
        dedented = [line.dedent(columns, tab_width) for line in nested]
        return parser.descend(list_level=True).parse_blocks(dedented)


class UnorderedListRule(ListRule):
    """Items marked with ``-``, ``*`` or ``+``."""

    name = "unordered_list"
    list_type = ListType.UNORDERED
    marker_pattern = re.compile(r"[ \t]*(?P<marker>[-*+])(?:[ \t]+(?P<content>.*))?$")


class OrderedListRule(ListRule):
    """Items marked with ``1.`` or ``1)``; the first number sets ``start``."""

    name = "ordered_list"
    list_type = ListType.ORDERED
    marker_pattern = re.compile(
        r"[ \t]*(?P<marker>(?P<number>\d{1,9})[.)])(?:[ \t]+(?P<content>.*))?$"
    )

    def start_value(self, match: re.Match[str]) -> int:
        return int(match.group("number"))


class AlphabeticalListRule(ListRule):
    """Items marked with ``a.`` or ``B)``; the first letter sets ``start``."""

    name = "alphabetical_list"
    list_type = ListType.ALPHABETICAL
    marker_pattern = re.compile(
        r"[ \t]*(?P<marker>(?P<letter>[a-zA-Z])[.)])(?:[ \t]+(?P<content>.*))?$"
    )

    def start_value(self, match: re.Match[str]) -> int:
        return ord(match.group("letter").lower()) - ord("a") + 1
