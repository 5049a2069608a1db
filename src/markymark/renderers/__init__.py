"""markymark renderers.

Renderers turn the parsed item tree into an output format. They are
consumers of the tree; the parser never depends on them.

Available Renderers:
- HtmlRenderer: semantic HTML, styled through HtmlStyling
- TextRenderer: readable plain text, styled through TextStyling

Thread Safety:
Renderers keep per-render state local to each render() call and can be
shared across threads.

"""

from markymark.renderers.html import HtmlRenderer, HtmlStyling, render_html
from markymark.renderers.protocol import Renderer
from markymark.renderers.text import TextRenderer, TextStyling, render_text

__all__ = [
    "HtmlRenderer",
    "HtmlStyling",
    "Renderer",
    "TextRenderer",
    "TextStyling",
    "render_html",
    "render_text",
]
