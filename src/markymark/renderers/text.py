"""Plain-text renderer.

Outputs readable text with no markup: emphasis is dropped, list items get
a bullet or their ordinal, nested lists are indented, link URLs follow the
link text in parentheses, code blocks are indented. Blocks are separated
by one blank line.

Items the renderer does not know are rendered from their ``children`` or,
failing that, their ``content``; an item with neither raises RenderError.

Example:
    >>> from markymark import parse_markdown
    >>> render_text(parse_markdown("# Hello **World**\\n\\n- item"))
    'Hello World\\n\\n• item\\n'

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from markymark.errors import RenderError
from markymark.nodes import (
    Bold,
    BlockQuote,
    CodeBlock,
    Header,
    HorizontalLine,
    Image,
    InlineCode,
    Italic,
    LineBreak,
    Link,
    List,
    ListItem,
    ListType,
    MarkDownItem,
    Paragraph,
    PlainText,
    Strikethrough,
    Table,
    TableCell,
    TableRow,
)
from markymark.stringbuilder import StringBuilder


@dataclass(frozen=True, slots=True)
class TextStyling:
    """Presentation options for TextRenderer.

    Attributes:
        bullet: Marker for unordered list items
        indent: Indentation per list level and for code blocks
        show_urls: Append ``(url)`` after link text that differs from it

    """

    bullet: str = "•"
    indent: str = "    "
    show_urls: bool = True


def _alpha_label(ordinal: int) -> str:
    """1 -> a, 26 -> z, 27 -> aa."""
    label = ""
    while ordinal > 0:
        ordinal, rem = divmod(ordinal - 1, 26)
        label = chr(ord("a") + rem) + label
    return label


class TextRenderer:
    """Render items to plain text."""

    __slots__ = ("_styling",)

    def __init__(self, styling: TextStyling | None = None) -> None:
        self._styling = styling or TextStyling()

    @property
    def styling(self) -> TextStyling:
        return self._styling

    def render(self, items: Sequence[MarkDownItem]) -> str:
        """Render items to text ending in a newline (empty for no items)."""
        blocks = [self._block(item) for item in items]
        if not blocks:
            return ""
        sb = StringBuilder()
        for i, block in enumerate(blocks):
            if i:
                sb.append("\n\n")
            sb.append(block)
        sb.append("\n")
        return sb.build()

    # =========================================================================
    # Blocks
    # =========================================================================

    def _block(self, item: MarkDownItem) -> str:
        match item:
            case Header() | Paragraph() | TableCell():
                return self.inline_text(item.children)
            case List():
                return "\n".join(self._list_lines(item))
            case ListItem():
                return "\n".join(self._item_lines(item, self._styling.bullet, 0))
            case BlockQuote():
                inner = "\n\n".join(self._block(child) for child in item.children)
                return "\n".join(f"> {line}".rstrip() for line in inner.split("\n"))
            case CodeBlock():
                return "\n".join(
                    f"{self._styling.indent}{line}" if line else ""
                    for line in item.content.split("\n")
                )
            case HorizontalLine():
                return "---"
            case Table():
                return "\n".join(self._row(row) for row in item.children)
            case TableRow():
                return self._row(item)
            case _:
                return self._fallback(item)

    def _list_lines(self, lst: List) -> list[str]:
        lines: list[str] = []
        for i, item in enumerate(lst.children):
            ordinal = lst.start + i
            match lst.list_type:
                case ListType.ORDERED:
                    marker = f"{ordinal}."
                case ListType.ALPHABETICAL:
                    marker = f"{_alpha_label(ordinal)}."
                case _:
                    marker = self._styling.bullet
            lines.extend(self._item_lines(item, marker, lst.depth))
        return lines

    def _item_lines(self, item: ListItem, marker: str, depth: int) -> list[str]:
        prefix = self._styling.indent * depth
        text = self.inline_text(item.children)
        continuation = prefix + " " * (len(marker) + 1)
        first, *rest = text.split("\n")
        lines = [f"{prefix}{marker} {first}".rstrip()]
        lines.extend(f"{continuation}{line}" for line in rest)
        for block in item.nested:
            if isinstance(block, List):
                lines.extend(self._list_lines(block))
                continue
            nested_prefix = self._styling.indent * (depth + 1)
            lines.extend(
                f"{nested_prefix}{line}" if line else ""
                for line in self._block(block).split("\n")
            )
        return lines

    def _row(self, row: TableRow) -> str:
        cells = [self.inline_text(cell.children) for cell in row.children]
        return "| " + " | ".join(cells) + " |"

    def _fallback(self, item: MarkDownItem) -> str:
        children = getattr(item, "children", None)
        if children is not None:
            return self.inline_text(children)
        content = getattr(item, "content", None)
        if isinstance(content, str):
            return content
        raise RenderError(f"No text rendering for {type(item).__name__}")

    # =========================================================================
    # Inline
    # =========================================================================

    def inline_text(self, items: Sequence[MarkDownItem]) -> str:
        """Plain text of inline items."""
        sb = StringBuilder()
        for item in items:
            match item:
                case PlainText() | InlineCode():
                    sb.append(item.content)
                case Bold() | Italic() | Strikethrough():
                    sb.append(self.inline_text(item.children))
                case Link():
                    text = self.inline_text(item.children)
                    sb.append(text)
                    if self._styling.show_urls and item.url and item.url != text:
                        sb.append(f" ({item.url})")
                case Image():
                    sb.append(f"[image: {item.alt_text}]" if item.alt_text else "[image]")
                case LineBreak():
                    sb.append("\n")
                case _:
                    sb.append(self._fallback(item))
        return sb.build()


def render_text(items: Sequence[MarkDownItem], styling: TextStyling | None = None) -> str:
    """Render items to plain text with a one-off TextRenderer."""
    return TextRenderer(styling).render(items)
