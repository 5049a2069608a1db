"""Build a reduced flavor and register it under a name."""

from markymark import Flavor, FlavorBuilder, parse_markdown, register_flavor
from markymark.rules import BoldRule, HeaderRule, ItalicRule, UnorderedListRule


@register_flavor("notes")
def notes() -> Flavor:
    return (
        FlavorBuilder("notes")
        .add_rules([HeaderRule(), UnorderedListRule()])
        .add_rules([BoldRule(), ItalicRule()])
        .build()
    )


for item in parse_markdown("# Todo\n\n- *milk*\n- [not a link](x)", flavor="notes"):
    print(item.item_type, repr(item.raw))
