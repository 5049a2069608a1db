"""Line splitter feeding the block phase.

Splits raw Markdown into logical lines, normalizing ``\\r\\n`` and ``\\r``
to a single line terminator while remembering where every line starts in
the original string. Nothing is dropped: blank lines stay in the sequence
as empty spans because they separate blocks.

Nested constructs (block quotes, list items) are parsed by handing the
block phase a new sequence of *dedented* lines. ``Line.dedent`` advances the
offset along with the text, so items built from nested content still point
into the original source.

Thread Safety:
Line is frozen and split_lines is a pure function.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from markymark.location import SourceLocation

_LINE_END = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class Line:
    """One logical source line without its terminator.

    Attributes:
        text: Line content
        lineno: 1-indexed line number in the original source
        offset: Offset of ``text[0]`` in the original source

    """

    text: str
    lineno: int
    offset: int

    @property
    def is_blank(self) -> bool:
        """True for empty or whitespace-only lines."""
        return not self.text.strip()

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.text)

    def indent(self, tab_width: int = 4) -> int:
        """Count leading whitespace in columns, expanding tabs to tab stops."""
        columns = 0
        for char in self.text:
            if char == " ":
                columns += 1
            elif char == "\t":
                columns += tab_width - (columns % tab_width)
            else:
                break
        return columns

    def dedent(self, columns: int, tab_width: int = 4) -> Line:
        """Remove up to ``columns`` columns of leading whitespace.

        A tab that straddles the boundary is consumed whole.
        """
        consumed = 0
        pos = 0
        text = self.text
        while pos < len(text) and consumed < columns:
            char = text[pos]
            if char == " ":
                consumed += 1
            elif char == "\t":
                consumed += tab_width - (consumed % tab_width)
            else:
                break
            pos += 1
        if pos == 0:
            return self
        return Line(text[pos:], self.lineno, self.offset + pos)

    def advance(self, count: int) -> Line:
        """Drop the first ``count`` characters (used for quote markers)."""
        if count <= 0:
            return self
        return Line(self.text[count:], self.lineno, self.offset + count)


def split_lines(source: str) -> tuple[Line, ...]:
    """Split source into lines, preserving original offsets.

    A terminator at the very end of the input does not open an extra empty
    line; empty input yields no lines.

    Example:
        >>> [line.text for line in split_lines("a\\r\\n\\nb\\n")]
        ['a', '', 'b']

    """
    lines: list[Line] = []
    start = 0
    lineno = 1
    for match in _LINE_END.finditer(source):
        lines.append(Line(source[start : match.start()], lineno, start))
        start = match.end()
        lineno += 1
    if start < len(source):
        lines.append(Line(source[start:], lineno, start))
    return tuple(lines)


def join_lines(lines: Sequence[Line]) -> str:
    """Join line texts with a normalized newline."""
    return "\n".join(line.text for line in lines)


def span_location(lines: Sequence[Line], start: int, end: int) -> SourceLocation:
    """Build the SourceLocation covering ``lines[start:end]``."""
    first = lines[start]
    last = lines[end - 1]
    return SourceLocation(
        lineno=first.lineno,
        end_lineno=last.lineno,
        offset=first.offset,
        end_offset=last.end_offset,
    )
