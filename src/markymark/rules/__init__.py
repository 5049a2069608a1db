"""Grammar rules for markymark.

Block rules match whole lines; inline rules match inside the text of a
block item. See markymark.rules.protocol for the contracts a custom rule
implements.

Example:
    >>> import re
    >>> from markymark import MarkyMark, PlainText
    >>> from markymark.rules import RegexInlineRule
    >>>
    >>> class MentionRule(RegexInlineRule):
    ...     name = "mention"
    ...     pattern = re.compile(r"@\\w+")
    ...     def build(self, match, parser):
    ...         return PlainText(raw=match.group(0), content=match.group(0).upper())
    >>>
    >>> items = MarkyMark().add_rule(MentionRule()).parse_markdown("hi @bob")
    >>> items[0].children[1].content
    '@BOB'

"""

from markymark.rules.blocks import (
    CodeBlockRule,
    HeaderRule,
    HorizontalLineRule,
    ParagraphRule,
    QuoteRule,
    TableRule,
)
from markymark.rules.emphasis import (
    BoldRule,
    Delimiter,
    DelimiterIndex,
    DelimiterRule,
    DelimiterSpan,
    ItalicRule,
    StrikethroughRule,
)
from markymark.rules.inline import (
    EscapeRule,
    ImageRule,
    InlineCodeRule,
    LineBreakRule,
    LinkRule,
)
from markymark.rules.lists import (
    AlphabeticalListRule,
    ListRule,
    OrderedListRule,
    UnorderedListRule,
)
from markymark.rules.protocol import (
    BaseBlockRule,
    BlockRule,
    Extraction,
    InlineMatch,
    InlineRule,
    Phase,
    RegexInlineRule,
    Rule,
    rule_name,
)

__all__ = [
    # Protocols and bases
    "BaseBlockRule",
    "BlockRule",
    "Delimiter",
    "DelimiterIndex",
    "DelimiterRule",
    "DelimiterSpan",
    "Extraction",
    "InlineMatch",
    "InlineRule",
    "Phase",
    "RegexInlineRule",
    "Rule",
    "rule_name",
    # Block rules
    "AlphabeticalListRule",
    "CodeBlockRule",
    "HeaderRule",
    "HorizontalLineRule",
    "ListRule",
    "OrderedListRule",
    "ParagraphRule",
    "QuoteRule",
    "TableRule",
    "UnorderedListRule",
    # Inline rules
    "BoldRule",
    "EscapeRule",
    "ImageRule",
    "InlineCodeRule",
    "ItalicRule",
    "LineBreakRule",
    "LinkRule",
    "StrikethroughRule",
]
