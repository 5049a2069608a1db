"""Rule protocols and shared base classes.

A rule is a stateless matcher + extractor for one grammar construct. Rules
belong to one of two phases:

1. Block rules work on whole lines:
   - ``matches(lines, index, parser)`` tells whether the construct starts at
     ``lines[index]``; it may peek at following lines (table delimiter rows)
     but must not have side effects.
   - ``extract(lines, index, parser)`` builds one item and reports how many
     lines it consumed through ``Extraction.end``.

2. Inline rules work inside the text of a block item:
   - ``search(text, pos)`` returns the leftmost match starting at or after
     ``pos`` (anything with ``start()``/``end()``, usually an ``re.Match``).
   - ``extract(match, parser)`` turns that match into one item.
   - optionally ``searcher(text)`` returns an object whose ``search(pos)``
     the parser uses for the rest of one ``parse_inline`` call, so a rule
     can index the text once instead of rescanning it per search.

Nested content is never parsed by the rule itself: ``extract`` receives the
active Parser and calls ``parser.parse_inline`` or
``parser.descend().parse_blocks`` on the captured text, so every block rule
gets properly parsed children without knowing the inline grammar.

Thread Safety:
Rules hold no per-call state. Settings come from the ContextVar config
(markymark.config) and per-parse state lives on the Parser.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from markymark.nodes import MarkDownItem
    from markymark.parser import Parser
    from markymark.tokenizer import Line


class Phase(Enum):
    """Matching phase a rule takes part in."""

    BLOCK = "block"
    INLINE = "inline"


class Extraction(NamedTuple):
    """Result of a block rule: the item and the index after its last line."""

    item: MarkDownItem
    end: int


class InlineMatch(Protocol):
    """Position of an inline match. ``re.Match`` satisfies this."""

    def start(self) -> int: ...

    def end(self) -> int: ...


@runtime_checkable
class BlockRule(Protocol):
    """Protocol for block-phase rules."""

    phase: Phase

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        """Whether this construct starts at ``lines[index]``."""
        ...

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        """Build the item starting at ``lines[index]``."""
        ...


@runtime_checkable
class InlineRule(Protocol):
    """Protocol for inline-phase rules."""

    phase: Phase

    def search(self, text: str, pos: int) -> InlineMatch | None:
        """Leftmost match in ``text`` starting at or after ``pos``."""
        ...

    def extract(self, match: InlineMatch, parser: Parser) -> MarkDownItem:
        """Build the item for ``match``."""
        ...


type Rule = BlockRule | InlineRule


def rule_name(rule: object) -> str:
    """Human-readable rule identifier for logs and errors."""
    return getattr(rule, "name", None) or type(rule).__name__


class BaseBlockRule:
    """Convenience base for block rules."""

    phase: ClassVar[Phase] = Phase.BLOCK
    name: ClassVar[str] = "block"

    def matches(self, lines: Sequence[Line], index: int, parser: Parser) -> bool:
        raise NotImplementedError

    def extract(self, lines: Sequence[Line], index: int, parser: Parser) -> Extraction:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RegexInlineRule:
    """Base for inline rules backed by one compiled pattern.

    Subclasses set ``pattern`` and implement ``build``. Python's ``re``
    search is leftmost-first, which is exactly the contract of ``search``.

    """

    phase: ClassVar[Phase] = Phase.INLINE
    name: ClassVar[str] = "inline"
    pattern: ClassVar[re.Pattern[str]]

    def search(self, text: str, pos: int) -> re.Match[str] | None:
        return self.pattern.search(text, pos)

    def matches(self, span: str) -> bool:
        """Whether ``span`` begins with this construct."""
        return self.pattern.match(span) is not None

    def extract(self, match: re.Match[str], parser: Parser) -> MarkDownItem:  # type: ignore[override]
        return self.build(match, parser)

    def build(self, match: re.Match[str], parser: Parser) -> MarkDownItem:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
