"""Typed MarkDownItem tree produced by the parser.

All items are frozen dataclasses with slots:
- Immutability: a parsed tree can be shared between renderers and threads
- Pattern matching: renderers dispatch with ``match`` on the item class
- Semantic only: items carry structure and text, never styling decisions

Item Hierarchy:
MarkDownItem (raw text + item_type tag)
├── Block (adds source location)
│   ├── Paragraph
│   ├── Header
│   ├── List
│   ├── ListItem
│   ├── BlockQuote
│   ├── CodeBlock
│   ├── HorizontalLine
│   ├── Table
│   ├── TableRow
│   └── TableCell
└── inline items
    ├── PlainText
    ├── Bold
    ├── Italic
    ├── Strikethrough
    ├── InlineCode
    ├── Link
    ├── Image
    └── LineBreak

For every text-bearing item the ``raw`` texts of its inline ``children``
concatenate back to its ``content``: children never overlap and never skip
source text.

Custom rules may produce their own MarkDownItem subclasses; renderers and
serialization treat unknown classes explicitly (see markymark.renderers).

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import ClassVar, Literal

from markymark.location import SourceLocation


class ItemType(StrEnum):
    """Semantic tags of the built-in items."""

    PARAGRAPH = "paragraph"
    HEADER = "header"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code_block"
    HORIZONTAL_LINE = "horizontal_line"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    PLAIN_TEXT = "plain_text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    INLINE_CODE = "inline_code"
    LINK = "link"
    IMAGE = "image"
    LINE_BREAK = "line_break"


class ListType(Enum):
    """Marker family of a list."""

    UNORDERED = "unordered"
    ORDERED = "ordered"
    ALPHABETICAL = "alphabetical"


type Align = Literal["left", "center", "right"] | None


@dataclass(frozen=True, slots=True)
class MarkDownItem:
    """Base class for every parsed item.

    Attributes:
        raw: The source text this item was built from

    """

    item_type: ClassVar[str] = ""

    raw: str


# =============================================================================
# Inline items
# =============================================================================


@dataclass(frozen=True, slots=True)
class PlainText(MarkDownItem):
    """Literal text.

    ``content`` differs from ``raw`` only for backslash escapes
    (raw ``\\*``, content ``*``).

    """

    item_type: ClassVar[str] = ItemType.PLAIN_TEXT

    content: str


@dataclass(frozen=True, slots=True)
class Bold(MarkDownItem):
    """Strong emphasis.

    Markdown: **text** or __text__

    """

    item_type: ClassVar[str] = ItemType.BOLD

    content: str
    children: tuple[MarkDownItem, ...]


@dataclass(frozen=True, slots=True)
class Italic(MarkDownItem):
    """Emphasis.

    Markdown: *text* or _text_

    """

    item_type: ClassVar[str] = ItemType.ITALIC

    content: str
    children: tuple[MarkDownItem, ...]


@dataclass(frozen=True, slots=True)
class Strikethrough(MarkDownItem):
    """Deleted text.

    Markdown: ~~text~~

    """

    item_type: ClassVar[str] = ItemType.STRIKETHROUGH

    content: str
    children: tuple[MarkDownItem, ...]


@dataclass(frozen=True, slots=True)
class InlineCode(MarkDownItem):
    """Code span. Content is literal, never inline-parsed."""

    item_type: ClassVar[str] = ItemType.INLINE_CODE

    content: str


@dataclass(frozen=True, slots=True)
class Link(MarkDownItem):
    """Hyperlink.

    Markdown: [text](url "title")

    """

    item_type: ClassVar[str] = ItemType.LINK

    content: str
    children: tuple[MarkDownItem, ...]
    url: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Image(MarkDownItem):
    """Image.

    Markdown: ![alt](url "title")

    """

    item_type: ClassVar[str] = ItemType.IMAGE

    url: str
    alt_text: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class LineBreak(MarkDownItem):
    """Line break inside a paragraph."""

    item_type: ClassVar[str] = ItemType.LINE_BREAK


# =============================================================================
# Block items
# =============================================================================


@dataclass(frozen=True, slots=True)
class Block(MarkDownItem):
    """Base class for block items, which know their source lines."""

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Paragraph(Block):
    """Run of text lines ended by a blank line or another block."""

    item_type: ClassVar[str] = ItemType.PARAGRAPH

    content: str
    children: tuple[MarkDownItem, ...]


@dataclass(frozen=True, slots=True)
class Header(Block):
    """ATX header.

    Markdown: ## Title

    """

    item_type: ClassVar[str] = ItemType.HEADER

    level: int
    content: str
    children: tuple[MarkDownItem, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Block):
    """One entry of a List.

    ``children`` holds the inline items of the entry's own text;
    ``nested`` holds blocks indented beneath it (usually a sub-list).

    """

    item_type: ClassVar[str] = ItemType.LIST_ITEM

    content: str
    children: tuple[MarkDownItem, ...]
    nested: tuple[Block, ...] = ()
    marker: str = "-"


@dataclass(frozen=True, slots=True)
class List(Block):
    """Sibling list items sharing a marker family.

    ``depth`` is 0 for a top-level list and grows by one per enclosing list.

    """

    item_type: ClassVar[str] = ItemType.LIST

    children: tuple[ListItem, ...]
    list_type: ListType = ListType.UNORDERED
    depth: int = 0
    start: int = 1

    @property
    def ordered(self) -> bool:
        return self.list_type is not ListType.UNORDERED


@dataclass(frozen=True, slots=True)
class BlockQuote(Block):
    """Quoted blocks. Content is the text with ``>`` markers removed."""

    item_type: ClassVar[str] = ItemType.BLOCKQUOTE

    content: str
    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock(Block):
    """Fenced code block; ``language`` is the first word of the info string."""

    item_type: ClassVar[str] = ItemType.CODE_BLOCK

    content: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class HorizontalLine(Block):
    """Thematic break: ---, *** or ___."""

    item_type: ClassVar[str] = ItemType.HORIZONTAL_LINE


@dataclass(frozen=True, slots=True)
class TableCell(Block):
    """Table cell with inline content."""

    item_type: ClassVar[str] = ItemType.TABLE_CELL

    content: str
    children: tuple[MarkDownItem, ...]
    is_header: bool = False
    align: Align = None


@dataclass(frozen=True, slots=True)
class TableRow(Block):
    item_type: ClassVar[str] = ItemType.TABLE_ROW

    children: tuple[TableCell, ...]
    is_header: bool = False


@dataclass(frozen=True, slots=True)
class Table(Block):
    """Pipe table. The first row is the header row.

    Markdown:
        | A | B |
        |---|:-:|
        | 1 | 2 |

    """

    item_type: ClassVar[str] = ItemType.TABLE

    children: tuple[TableRow, ...]
    alignments: tuple[Align, ...] = ()


def walk(items: Iterable[MarkDownItem]) -> Iterator[MarkDownItem]:
    """Yield every item depth-first in document order.

    Example:
        >>> from markymark import parse_markdown
        >>> [str(i.item_type) for i in walk(parse_markdown("# *Hi*"))]
        ['header', 'italic', 'plain_text']

    """
    for item in items:
        yield item
        yield from walk(getattr(item, "children", ()))
        if isinstance(item, ListItem):
            yield from walk(item.nested)
