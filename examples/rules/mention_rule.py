"""Add an @mention rule and render the new item with a custom handler."""

import re
from dataclasses import dataclass
from typing import ClassVar

from markymark import HtmlRenderer, MarkDownItem, MarkyMark, RegexInlineRule


@dataclass(frozen=True, slots=True)
class Mention(MarkDownItem):
    item_type: ClassVar[str] = "mention"

    username: str


class MentionRule(RegexInlineRule):
    name = "mention"
    pattern = re.compile(r"@(\w+)")

    def build(self, match, parser):
        return Mention(raw=match.group(0), username=match.group(1))


mm = MarkyMark().add_rule(MentionRule())
items = mm.parse_markdown("Thanks @ada for the **review**")

renderer = HtmlRenderer(
    handlers={Mention: lambda item, r: f'<a href="/u/{item.username}">@{item.username}</a>'}
)
print(renderer.render(items))
