"""Block rules: headers, horizontal lines, code blocks, quotes, tables, paragraphs.

List rules live in markymark.rules.lists.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from markymark.nodes import (
    Align,
    BlockQuote,
    CodeBlock,
    Header,
    HorizontalLine,
    Paragraph,
    Table,
    TableCell,
    TableRow,
)
from markymark.rules.protocol import BaseBlockRule, Extraction
from markymark.tokenizer import Line, join_lines, span_location

if TYPE_CHECKING:
    from markymark.parser import Parser

_HEADER = re.compile(r" {0,3}(#{1,6})(?=[ \t]|$)(.*)$")
_CLOSING_HASHES = re.compile(r"(?:^|[ \t]+)#+$")
_HORIZONTAL_LINE = re.compile(r" {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_FENCE_OPEN = re.compile(r"( {0,3})(?:(`{3,})([^`]*)|(~{3,})(.*))$")
_QUOTE = re.compile(r" {0,3}> ?")
_TABLE_DELIMITER = re.compile(
    r" {0,3}\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$"
)
_CELL_SEPARATOR = re.compile(r"(?<!\\)\|")


class HeaderRule(BaseBlockRule):
    """ATX header: ``# Title`` through ``###### Title``.

    Trailing whitespace and an optional closing run of ``#`` are not part
    of the content.
    """

    name = "header"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return _HEADER.match(lines[index].text) is not None

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        line = lines[index]
        match = _HEADER.match(line.text)
        assert match is not None
        content = _CLOSING_HASHES.sub("", match.group(2).strip()).strip()
        item = Header(
            raw=line.text,
            location=span_location(lines, index, index + 1),
            level=len(match.group(1)),
            content=content,
            children=parser.parse_inline(content),
        )
        return Extraction(item, index + 1)


class HorizontalLineRule(BaseBlockRule):
    """``---``, ``***`` or ``___``, optionally spaced.

    Must come before the list rules so ``* * *`` is not read as a list.
    """

    name = "horizontal_line"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return _HORIZONTAL_LINE.match(lines[index].text) is not None

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        item = HorizontalLine(
            raw=lines[index].text,
            location=span_location(lines, index, index + 1),
        )
        return Extraction(item, index + 1)


class CodeBlockRule(BaseBlockRule):
    """Fenced code block with backticks or tildes.

    The closing fence must use the same character and be at least as long
    as the opening one. Without a closing fence the block runs to the end
    of the input.
    """

    name = "code_block"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return _FENCE_OPEN.match(lines[index].text) is not None

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        match = _FENCE_OPEN.match(lines[index].text)
        assert match is not None
        indent = len(match.group(1))
        fence = match.group(2) or match.group(4)
        info = (match.group(3) if match.group(2) else match.group(5)).strip()
        language = info.split()[0] if info else None

        closing = re.compile(rf" {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
        tab_width = parser.config.tab_width
        body: list[Line] = []
        end = index + 1
        closed = False
        while end < len(lines):
            line = lines[end]
            end += 1
            if closing.match(line.text):
                closed = True
                break
            body.append(line.dedent(indent, tab_width))

        last = end if closed else len(lines)
        item = CodeBlock(
            raw=join_lines(lines[index:last]),
            location=span_location(lines, index, last),
            content=join_lines(body),
            language=language,
        )
        return Extraction(item, last)


class QuoteRule(BaseBlockRule):
    """Consecutive ``>`` lines, parsed recursively as blocks."""

    name = "quote"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return _QUOTE.match(lines[index].text) is not None

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        inner: list[Line] = []
        end = index
        while end < len(lines):
            match = _QUOTE.match(lines[end].text)
            if match is None:
                break
            inner.append(lines[end].advance(match.end()))
            end += 1

        item = BlockQuote(
            raw=join_lines(lines[index:end]),
            location=span_location(lines, index, end),
            content=join_lines(inner),
            children=parser.descend().parse_blocks(inner),
        )
        return Extraction(item, end)


def _split_cells(text: str) -> list[str]:
    stripped = text.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    return _CELL_SEPARATOR.split(stripped)


def _alignment(cell: str) -> Align:
    cell = cell.strip()
    left = cell.startswith(":")
    right = cell.endswith(":")
    if left and right:
        return "center"
    if right:
        return "right"
    if left:
        return "left"
    return None


class TableRule(BaseBlockRule):
    """Pipe table: header row, delimiter row, then body rows.

    Body rows run until a blank line or a line without ``|``. Rows are
    padded or truncated to the header's column count.
    """

    name = "table"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        if index + 1 >= len(lines) or "|" not in lines[index].text:
            return False
        delimiter = lines[index + 1].text
        if _TABLE_DELIMITER.match(delimiter) is None:
            return False
        return len(_split_cells(lines[index].text)) == len(_split_cells(delimiter))

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        alignments = tuple(_alignment(cell) for cell in _split_cells(lines[index + 1].text))

        rows = [self._row(lines, index, parser, alignments, is_header=True)]
        end = index + 2
        while end < len(lines) and not lines[end].is_blank and "|" in lines[end].text:
            rows.append(self._row(lines, end, parser, alignments, is_header=False))
            end += 1

        item = Table(
            raw=join_lines(lines[index:end]),
            location=span_location(lines, index, end),
            children=tuple(rows),
            alignments=alignments,
        )
        return Extraction(item, end)

    def _row(
        self,
        lines: Sequence[Line],
        index: int,
        parser: Parser,
        alignments: tuple[Align, ...],
        *,
        is_header: bool,
    ) -> TableRow:
        location = span_location(lines, index, index + 1)
        cells = _split_cells(lines[index].text)[: len(alignments)]
        cells += [""] * (len(alignments) - len(cells))
        children = []
        for raw, align in zip(cells, alignments):
            content = raw.strip()
            children.append(
                TableCell(
                    raw=raw,
                    location=location,
                    content=content,
                    children=parser.parse_inline(content),
                    is_header=is_header,
                    align=align,
                )
            )
        return TableRow(
            raw=lines[index].text,
            location=location,
            children=tuple(children),
            is_header=is_header,
        )


class ParagraphRule(BaseBlockRule):
    """Fallback rule: text lines up to a blank line or another block.

    Flavors use it as their default rule; it matches any non-blank line.
    """

    name = "paragraph"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        return not lines[index].is_blank

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        end = index + 1
        while end < len(lines) and not lines[end].is_blank and not parser.interrupts(lines, end):
            end += 1

        chunk = lines[index:end]
        content = join_lines(chunk).strip()
        item = Paragraph(
            raw=join_lines(chunk),
            location=span_location(lines, index, end),
            content=content,
            children=parser.parse_inline(content),
        )
        return Extraction(item, end)
