"""Tests for the HTML and plain-text renderers."""

from dataclasses import dataclass
from typing import ClassVar

import pytest

from markymark import (
    Bold,
    HtmlRenderer,
    HtmlStyling,
    MarkDownItem,
    PlainText,
    RenderError,
    Renderer,
    TextRenderer,
    TextStyling,
    parse_markdown,
    render_html,
    render_text,
)
from markymark.renderers.html import extract_text


@dataclass(frozen=True, slots=True)
class Mention(MarkDownItem):
    item_type: ClassVar[str] = "mention"

    username: str


@dataclass(frozen=True, slots=True)
class Callout(MarkDownItem):
    item_type: ClassVar[str] = "callout"

    children: tuple[MarkDownItem, ...]


def html(source: str, styling: HtmlStyling | None = None) -> str:
    return render_html(parse_markdown(source), styling)


def text(source: str, styling: TextStyling | None = None) -> str:
    return render_text(parse_markdown(source), styling)


class TestProtocol:
    """Both renderers satisfy the Renderer protocol."""

    @pytest.mark.parametrize("renderer", [HtmlRenderer(), TextRenderer()])
    def test_is_renderer(self, renderer: object) -> None:
        assert isinstance(renderer, Renderer)


class TestHtmlBlocks:
    """HTML for block items."""

    def test_header_with_bold(self) -> None:
        assert html("# Hello **World**") == "<h1>Hello <strong>World</strong></h1>\n"

    def test_paragraph(self) -> None:
        assert html("some *text*") == "<p>some <em>text</em></p>\n"

    def test_unordered_list(self) -> None:
        assert html("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_nested_list(self) -> None:
        assert html("- a\n  - b") == "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"

    def test_ordered_list_start(self) -> None:
        assert html("3. x") == '<ol start="3">\n<li>x</li>\n</ol>\n'

    def test_ordered_list_from_one(self) -> None:
        assert html("1. x\n2. y") == "<ol>\n<li>x</li>\n<li>y</li>\n</ol>\n"

    def test_alphabetical_list(self) -> None:
        assert html("a. x\nb. y") == '<ol type="a">\n<li>x</li>\n<li>y</li>\n</ol>\n'

    def test_code_block(self) -> None:
        assert (
            html("```python\nx = 1\n```")
            == '<pre><code class="language-python">x = 1\n</code></pre>\n'
        )

    def test_code_block_is_escaped(self) -> None:
        assert html("```\n<b>&</b>\n```") == "<pre><code>&lt;b&gt;&amp;&lt;/b&gt;\n</code></pre>\n"

    def test_quote(self) -> None:
        assert html("> q") == "<blockquote>\n<p>q</p>\n</blockquote>\n"

    def test_horizontal_line(self) -> None:
        assert html("---") == "<hr />\n"

    def test_table(self) -> None:
        result = html("| a | b |\n|:--|--:|\n| 1 | 2 |")

        assert result == (
            "<table>\n"
            "<thead>\n<tr>\n"
            '<th style="text-align: left">a</th>\n'
            '<th style="text-align: right">b</th>\n'
            "</tr>\n</thead>\n"
            "<tbody>\n<tr>\n"
            '<td style="text-align: left">1</td>\n'
            '<td style="text-align: right">2</td>\n'
            "</tr>\n</tbody>\n"
            "</table>\n"
        )

    def test_empty_document(self) -> None:
        assert html("") == ""


class TestHtmlInline:
    """HTML for inline items."""

    def test_line_break(self) -> None:
        assert html("a\nb") == "<p>a<br />\nb</p>\n"

    def test_text_is_escaped(self) -> None:
        assert html('<script> & "x"') == "<p>&lt;script&gt; &amp; &quot;x&quot;</p>\n"

    def test_inline_code(self) -> None:
        assert html("`<a>`") == "<p><code>&lt;a&gt;</code></p>\n"

    def test_link_with_title(self) -> None:
        assert html('[a](http://x "T")') == '<p><a href="http://x" title="T">a</a></p>\n'

    def test_link_url_is_encoded(self) -> None:
        assert html("[a](café)") == '<p><a href="caf%C3%A9">a</a></p>\n'

    def test_image(self) -> None:
        assert html("![alt](i.png)") == '<p><img src="i.png" alt="alt" /></p>\n'

    def test_strikethrough(self) -> None:
        assert html("~~x~~") == "<p><del>x</del></p>\n"


class TestHtmlStyling:
    """Presentation options."""

    def test_heading_ids_are_unique(self) -> None:
        result = html("# Hello\n# Hello", HtmlStyling(heading_ids=True))

        assert result == '<h1 id="hello">Hello</h1>\n<h1 id="hello-1">Hello</h1>\n'

    def test_slugs_reset_between_renders(self) -> None:
        renderer = HtmlRenderer(HtmlStyling(heading_ids=True))
        items = parse_markdown("# Hello")

        assert renderer.render(items) == renderer.render(items)

    def test_render_children_ids_unique_per_call(self) -> None:
        renderer = HtmlRenderer(HtmlStyling(heading_ids=True))
        items = parse_markdown("# A\n# A")

        assert renderer.render_children(items) == '<h1 id="a">A</h1>\n<h1 id="a-1">A</h1>\n'
        assert renderer.render_children(items) == '<h1 id="a">A</h1>\n<h1 id="a-1">A</h1>\n'

    def test_handler_shares_ids_with_document(self) -> None:
        renderer = HtmlRenderer(
            HtmlStyling(heading_ids=True),
            handlers={Callout: lambda item, r: r.render_children(item.children)},
        )
        header = parse_markdown("# A")[0]

        result = renderer.render([header, Callout(raw="# A", children=(header,))])

        assert result == '<h1 id="a">A</h1>\n<h1 id="a-1">A</h1>\n'

    def test_heading_offset_is_clamped(self) -> None:
        styling = HtmlStyling(heading_offset=2)

        assert html("# A", styling) == "<h3>A</h3>\n"
        assert html("###### A", styling) == "<h6>A</h6>\n"

    def test_link_target_blank(self) -> None:
        result = html("[a](u)", HtmlStyling(link_target="_blank"))

        assert result == '<p><a href="u" target="_blank" rel="noopener noreferrer">a</a></p>\n'

    def test_code_class_prefix(self) -> None:
        result = html("```js\nx\n```", HtmlStyling(code_class_prefix="lang-"))

        assert result.startswith('<pre><code class="lang-js">')


class TestHtmlCustomItems:
    """Handlers for items produced by consumer rules."""

    def test_unknown_item_raises(self) -> None:
        with pytest.raises(RenderError, match="Mention"):
            HtmlRenderer().render([Mention(raw="@bob", username="bob")])

    def test_handler(self) -> None:
        renderer = HtmlRenderer(
            handlers={Mention: lambda item, r: f'<span class="mention">@{item.username}</span>'}
        )

        assert renderer.render([Mention(raw="@bob", username="bob")]) == (
            '<span class="mention">@bob</span>'
        )

    def test_handler_renders_children(self) -> None:
        renderer = HtmlRenderer(
            handlers={Callout: lambda item, r: f"<aside>{r.render_children(item.children)}</aside>"}
        )
        bold = Bold(raw="**x**", content="x", children=(PlainText(raw="x", content="x"),))
        callout = Callout(raw="**x**", children=(bold,))

        assert renderer.render([callout]) == "<aside><strong>x</strong></aside>"

    def test_handler_overrides_builtin(self) -> None:
        renderer = HtmlRenderer(handlers={Bold: lambda item, r: "<b>B</b>"})

        assert renderer.render(parse_markdown("**x**")) == "<p><b>B</b></p>\n"

    def test_extract_text(self) -> None:
        items = parse_markdown("**a** `b` ![c](d) [e](f)")[0].children

        assert extract_text(items) == "a b c e"


class TestTextRenderer:
    """Plain-text output."""

    def test_header_and_bullet(self) -> None:
        assert text("# Hello **World**\n\n- item") == "Hello World\n\n• item\n"

    def test_ordered(self) -> None:
        assert text("1. a\n2. b") == "1. a\n2. b\n"

    def test_alphabetical(self) -> None:
        assert text("a. x\nb. y") == "a. x\nb. y\n"

    def test_nested_indent(self) -> None:
        assert text("- a\n  - b") == "• a\n    • b\n"

    def test_link_url(self) -> None:
        assert text("[text](http://x)") == "text (http://x)\n"

    def test_link_url_hidden(self) -> None:
        assert text("[text](http://x)", TextStyling(show_urls=False)) == "text\n"

    def test_autolink_style_link_not_repeated(self) -> None:
        assert text("[http://x](http://x)") == "http://x\n"

    def test_code_block_indented(self) -> None:
        assert text("```\nx\n```") == "    x\n"

    def test_quote(self) -> None:
        assert text("> q") == "> q\n"

    def test_table(self) -> None:
        assert text("| a | b |\n|---|---|\n| 1 | 2 |") == "| a | b |\n| 1 | 2 |\n"

    def test_image(self) -> None:
        assert text("![logo](l.png)") == "[image: logo]\n"

    def test_custom_bullet(self) -> None:
        assert text("- a", TextStyling(bullet="*")) == "* a\n"

    def test_empty(self) -> None:
        assert text("") == ""

    def test_custom_item_fallbacks(self) -> None:
        renderer = TextRenderer()
        callout = Callout(raw="", children=(PlainText(raw="hi", content="hi"),))

        assert renderer.render([callout]) == "hi\n"
        with pytest.raises(RenderError):
            renderer.render([Mention(raw="@bob", username="bob")])
