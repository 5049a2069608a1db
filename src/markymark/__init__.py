"""
markymark: Markdown flavor-aware parser

Turns Markdown text into an ordered tuple of typed, immutable MarkDownItem
nodes. A flavor decides which grammar rules apply and in which order;
consumer rules plug in ahead of the flavor's own. Rendering is a separate
step: the tree carries semantics only.

Quick Start:
    >>> from markymark import parse_markdown, render_html
    >>> items = parse_markdown("# Hello *World*")
    >>> items[0].level, items[0].content
    (1, 'Hello *World*')
    >>> render_html(items)
    '<h1>Hello <em>World</em></h1>\\n'

Custom Rules:
    >>> from markymark import MarkyMark
    >>> mm = MarkyMark("contentful").add_rule(MyRule())
    >>> items = mm.parse_markdown(text)

Installation:
    pip install markymark              # Parser and renderers (zero deps)
"""

from markymark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from markymark.engine import MarkyMark
from markymark.errors import (
    ConfigError,
    FlavorError,
    MarkyMarkError,
    RenderError,
    RuleError,
)
from markymark.flavors import (
    BUILTIN_FLAVORS,
    DEFAULT_FLAVOR,
    Flavor,
    FlavorBuilder,
    get_flavor,
    register_flavor,
)
from markymark.location import SourceLocation
from markymark.nodes import (
    Block,
    BlockQuote,
    Bold,
    CodeBlock,
    Header,
    HorizontalLine,
    Image,
    InlineCode,
    Italic,
    ItemType,
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
    walk,
)
from markymark.parser import Parser
from markymark.renderers import (
    HtmlRenderer,
    HtmlStyling,
    Renderer,
    TextRenderer,
    TextStyling,
    render_html,
    render_text,
)
from markymark.rules import (
    BaseBlockRule,
    BlockRule,
    Extraction,
    InlineRule,
    Phase,
    RegexInlineRule,
)
from markymark.serialization import from_dict, from_json, to_dict, to_json
from markymark.tokenizer import Line, split_lines

__version__ = "0.1.0"


def parse_markdown(
    text: str,
    *,
    flavor: Flavor | str | None = None,
    config: ParseConfig | None = None,
) -> tuple[Block, ...]:
    """Parse Markdown text into block items.

    Args:
        text: Markdown source text
        flavor: A Flavor, a registered flavor name, or None for the default
        config: Parse configuration (defaults to ParseConfig())

    Returns:
        Block items in document order

    Example:
        >>> items = parse_markdown("Line one\\n\\nLine two")
        >>> [item.content for item in items]
        ['Line one', 'Line two']

    """
    return MarkyMark(flavor, config=config).parse_markdown(text)


__all__ = [
    # Engine
    "MarkyMark",
    "Parser",
    "parse_markdown",
    # Flavors
    "BUILTIN_FLAVORS",
    "DEFAULT_FLAVOR",
    "Flavor",
    "FlavorBuilder",
    "get_flavor",
    "register_flavor",
    # Rules
    "BaseBlockRule",
    "BlockRule",
    "Extraction",
    "InlineRule",
    "Phase",
    "RegexInlineRule",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Errors
    "ConfigError",
    "FlavorError",
    "MarkyMarkError",
    "RenderError",
    "RuleError",
    # Items
    "Block",
    "BlockQuote",
    "Bold",
    "CodeBlock",
    "Header",
    "HorizontalLine",
    "Image",
    "InlineCode",
    "Italic",
    "ItemType",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "ListType",
    "MarkDownItem",
    "Paragraph",
    "PlainText",
    "SourceLocation",
    "Strikethrough",
    "Table",
    "TableCell",
    "TableRow",
    "walk",
    # Tokenizer
    "Line",
    "split_lines",
    # Renderers
    "HtmlRenderer",
    "HtmlStyling",
    "Renderer",
    "TextRenderer",
    "TextStyling",
    "render_html",
    "render_text",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
