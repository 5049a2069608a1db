"""HTML renderer using the StringBuilder pattern.

Renders the MarkDownItem tree to semantic HTML. Presentation choices
(language class prefix, heading anchors, heading level offset, link target)
come from an HtmlStyling value passed at construction; the items
themselves carry no styling.

Custom Items:
Items produced by consumer rules are rendered through ``handlers``, a
mapping from item class to a callable ``(item, renderer) -> str``. The
handler may call ``renderer.render_children(item.children)`` for nested
content. Handlers are looked up along the item's MRO, so a handler for a
built-in class overrides the default markup. An item with neither a
built-in rendering nor a handler raises RenderError.

Thread Safety:
Per-render state lives in a RenderContext created for each render() call.
A single HtmlRenderer can be shared across threads.

"""

from __future__ import annotations

import html
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from urllib.parse import quote as url_quote

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
from markymark.utils.logger import get_logger
from markymark.utils.text import html_escape, slugify

logger = get_logger(__name__)

type RenderHandler = Callable[[MarkDownItem, HtmlRenderer], str]


def _encode_url(url: str) -> str:
    """Percent-encode spaces, backslashes and non-ASCII in a URL.

    Already-encoded sequences and reserved characters are kept. The result
    still needs html_escape for use in an attribute.
    """
    decoded = html.unescape(url)
    return url_quote(decoded, safe="/:?#[]@!$&'()*+,;=-_.~%")


@dataclass(frozen=True, slots=True)
class HtmlStyling:
    """Presentation options for HtmlRenderer.

    Attributes:
        code_class_prefix: Prefix of the class set on ``<code>`` for a
            code block with a language (``language-python``)
        heading_ids: Add slug ``id`` attributes to headings
        heading_offset: Added to every header level (clamped to 1-6)
        link_target: ``target`` attribute for links, e.g. ``"_blank"``

    """

    code_class_prefix: str = "language-"
    heading_ids: bool = False
    heading_offset: int = 0
    link_target: str | None = None


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state."""

    seen_slugs: set[str] = field(default_factory=set)


class HtmlRenderer:
    """Render items to HTML.

    Usage:
        >>> from markymark import parse_markdown
        >>> HtmlRenderer().render(parse_markdown("# Hello **World**"))
        '<h1>Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Each render() call creates an independent RenderContext.

    """

    __slots__ = ("_styling", "_handlers", "_ctx")

    def __init__(
        self,
        styling: HtmlStyling | None = None,
        *,
        handlers: Mapping[type[MarkDownItem], RenderHandler] | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            styling: Presentation options (defaults to HtmlStyling())
            handlers: Render callables for custom item classes

        """
        self._styling = styling or HtmlStyling()
        self._handlers: dict[type[MarkDownItem], RenderHandler] = dict(handlers or {})
        self._ctx: RenderContext | None = None
        if self._handlers:
            logger.debug(
                "HtmlRenderer with custom handlers for %s",
                ", ".join(sorted(cls.__name__ for cls in self._handlers)),
            )

    @property
    def styling(self) -> HtmlStyling:
        return self._styling

    def render(self, items: Sequence[MarkDownItem]) -> str:
        """Render items in document order to an HTML string.

        Raises:
            RenderError: If an item has no built-in rendering and no handler

        """
        renderer = self._fork()
        sb = StringBuilder()
        for item in items:
            renderer._render(item, sb)
        return sb.build()

    def render_children(self, items: Sequence[MarkDownItem]) -> str:
        """Render nested items; intended for custom handlers."""
        # Called outside render(): heading ids are unique within this call
        renderer = self if self._ctx is not None else self._fork()
        sb = StringBuilder()
        for item in items:
            renderer._render(item, sb)
        return sb.build()

    def _fork(self) -> HtmlRenderer:
        """Copy sharing styling and handlers, with a fresh RenderContext."""
        renderer = HtmlRenderer.__new__(HtmlRenderer)
        renderer._styling = self._styling
        renderer._handlers = self._handlers
        renderer._ctx = RenderContext()
        return renderer

    def _handler_for(self, item: MarkDownItem) -> RenderHandler | None:
        if not self._handlers:
            return None
        for cls in type(item).__mro__:
            handler = self._handlers.get(cls)
            if handler is not None:
                return handler
        return None

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render(self, item: MarkDownItem, sb: StringBuilder) -> None:
        handler = self._handler_for(item)
        if handler is not None:
            sb.append(handler(item, self))
            return

        match item:
            # Blocks
            case Header():
                self._render_header(item, sb)
            case Paragraph():
                sb.append("<p>")
                self._render_all(item.children, sb)
                sb.append("</p>\n")
            case List():
                self._render_list(item, sb)
            case ListItem():
                self._render_list_item(item, sb)
            case BlockQuote():
                sb.append("<blockquote>\n")
                self._render_all(item.children, sb)
                sb.append("</blockquote>\n")
            case CodeBlock():
                self._render_code_block(item, sb)
            case HorizontalLine():
                sb.append("<hr />\n")
            case Table():
                self._render_table(item, sb)
            case TableRow():
                self._render_table_row(item, sb)
            case TableCell():
                self._render_table_cell(item, sb)
            # Inline
            case PlainText():
                sb.append(html_escape(item.content))
            case Bold():
                self._wrap("strong", item.children, sb)
            case Italic():
                self._wrap("em", item.children, sb)
            case Strikethrough():
                self._wrap("del", item.children, sb)
            case InlineCode():
                sb.append("<code>").append(html_escape(item.content)).append("</code>")
            case Link():
                self._render_link(item, sb)
            case Image():
                src = html_escape(_encode_url(item.url))
                alt = html_escape(item.alt_text)
                title = f' title="{html_escape(item.title)}"' if item.title else ""
                sb.append(f'<img src="{src}" alt="{alt}"{title} />')
            case LineBreak():
                sb.append("<br />\n")
            case _:
                raise RenderError(
                    f"No HTML rendering for {type(item).__name__} "
                    f"(item_type={item.item_type!r}); pass a handler for it"
                )

    def _render_all(self, items: Sequence[MarkDownItem], sb: StringBuilder) -> None:
        for item in items:
            self._render(item, sb)

    def _wrap(self, tag: str, children: Sequence[MarkDownItem], sb: StringBuilder) -> None:
        sb.append(f"<{tag}>")
        self._render_all(children, sb)
        sb.append(f"</{tag}>")

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_header(self, header: Header, sb: StringBuilder) -> None:
        level = min(6, max(1, header.level + self._styling.heading_offset))
        id_attr = ""
        if self._styling.heading_ids:
            id_attr = f' id="{html_escape(self._unique_slug(header))}"'
        sb.append(f"<h{level}{id_attr}>")
        self._render_all(header.children, sb)
        sb.append(f"</h{level}>\n")

    def _unique_slug(self, header: Header) -> str:
        ctx = self._ctx
        assert ctx is not None
        slug = slugify(extract_text(header.children)) or "section"
        candidate = slug
        counter = 1
        while candidate in ctx.seen_slugs:
            candidate = f"{slug}-{counter}"
            counter += 1
        ctx.seen_slugs.add(candidate)
        return candidate

    def _render_list(self, lst: List, sb: StringBuilder) -> None:
        if not lst.ordered:
            sb.append("<ul>\n")
        else:
            type_attr = ' type="a"' if lst.list_type is ListType.ALPHABETICAL else ""
            start_attr = f' start="{lst.start}"' if lst.start != 1 else ""
            sb.append(f"<ol{type_attr}{start_attr}>\n")
        self._render_all(lst.children, sb)
        sb.append("</ol>\n" if lst.ordered else "</ul>\n")

    def _render_list_item(self, item: ListItem, sb: StringBuilder) -> None:
        sb.append("<li>")
        self._render_all(item.children, sb)
        if item.nested:
            sb.append("\n")
            self._render_all(item.nested, sb)
        sb.append("</li>\n")

    def _render_code_block(self, code: CodeBlock, sb: StringBuilder) -> None:
        class_attr = ""
        if code.language:
            class_attr = f' class="{html_escape(self._styling.code_class_prefix + code.language)}"'
        content = code.content
        if content and not content.endswith("\n"):
            content += "\n"
        sb.append(f"<pre><code{class_attr}>")
        sb.append(html_escape(content))
        sb.append("</code></pre>\n")

    def _render_table(self, table: Table, sb: StringBuilder) -> None:
        head = [row for row in table.children if row.is_header]
        body = [row for row in table.children if not row.is_header]
        sb.append("<table>\n")
        if head:
            sb.append("<thead>\n")
            self._render_all(head, sb)
            sb.append("</thead>\n")
        if body:
            sb.append("<tbody>\n")
            self._render_all(body, sb)
            sb.append("</tbody>\n")
        sb.append("</table>\n")

    def _render_table_row(self, row: TableRow, sb: StringBuilder) -> None:
        sb.append("<tr>\n")
        self._render_all(row.children, sb)
        sb.append("</tr>\n")

    def _render_table_cell(self, cell: TableCell, sb: StringBuilder) -> None:
        tag = "th" if cell.is_header else "td"
        style = f' style="text-align: {cell.align}"' if cell.align else ""
        sb.append(f"<{tag}{style}>")
        self._render_all(cell.children, sb)
        sb.append(f"</{tag}>\n")

    # =========================================================================
    # Inline
    # =========================================================================

    def _render_link(self, link: Link, sb: StringBuilder) -> None:
        href = html_escape(_encode_url(link.url))
        title = f' title="{html_escape(link.title)}"' if link.title else ""
        target = ""
        if self._styling.link_target:
            target = f' target="{html_escape(self._styling.link_target)}"'
            if self._styling.link_target == "_blank":
                target += ' rel="noopener noreferrer"'
        sb.append(f'<a href="{href}"{title}{target}>')
        self._render_all(link.children, sb)
        sb.append("</a>")


def extract_text(items: Sequence[MarkDownItem]) -> str:
    """Plain text of inline items, markup dropped."""
    parts: list[str] = []
    for item in items:
        match item:
            case PlainText() | InlineCode():
                parts.append(item.content)
            case Image():
                parts.append(item.alt_text)
            case LineBreak():
                parts.append(" ")
            case _:
                children = getattr(item, "children", None)
                if children:
                    parts.append(extract_text(children))
                elif isinstance(getattr(item, "content", None), str):
                    parts.append(item.content)  # type: ignore[attr-defined]
    return "".join(parts)


def render_html(items: Sequence[MarkDownItem], styling: HtmlStyling | None = None) -> str:
    """Render items to HTML with a one-off HtmlRenderer.

    Example:
        >>> from markymark import parse_markdown
        >>> render_html(parse_markdown("- a\\n- b"))
        '<ul>\\n<li>a</li>\\n<li>b</li>\\n</ul>\\n'

    """
    return HtmlRenderer(styling).render(items)
