"""Rule-driven parser producing the MarkDownItem tree.

A Parser applies one Flavor to one input. Block parsing walks the lines and
hands each non-blank position to the first block rule that matches; inline
parsing scans a text span for the leftmost match among the flavor's inline
rules. Rules call back into the Parser for nested content, which is how
block items get inline children and quotes or lists get block children.

Inline Scanning:
Each inline rule is searched once and its match cached. The cache entry is
only refreshed when the cursor has moved past the cached match's start, so
every rule scans the text forward instead of being retried at every
character. Among the cached matches the earliest start wins; at the same
start the rule listed first in the flavor wins. A rule that defines
``searcher(text)`` is bound to the text once per call, which lets it index
the text up front (see markymark.rules.emphasis).

Nesting:
Block recursion (quotes, list items) and inline recursion (links,
emphasis) each count against ``ParseConfig.max_nesting``. Past the limit
blocks are kept as paragraphs of plain text and inline content as a single
PlainText, which bounds recursion for any input.

Thread Safety:
Parser instances hold per-call state and are not shared. Create one per
parse operation; the engine does this for you. Configuration is read from
the ContextVar (thread-local) once, at construction.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from typing import TYPE_CHECKING

from markymark.config import ParseConfig, get_parse_config
from markymark.errors import RuleError
from markymark.nodes import Block, MarkDownItem, Paragraph, PlainText
from markymark.rules.protocol import BlockRule, Extraction, InlineMatch, InlineRule, rule_name
from markymark.tokenizer import Line, join_lines, span_location, split_lines
from markymark.utils.logger import get_logger

if TYPE_CHECKING:
    from markymark.flavors import Flavor

logger = get_logger(__name__)


class Parser:
    """Applies a Flavor's rules to Markdown source.

    Usage:
        >>> from markymark.flavors import get_flavor
        >>> parser = Parser(get_flavor("contentful"))
        >>> parser.parse("# Hello")[0].content
        'Hello'

    Thread Safety:
        Parser instances are single-use and not thread-safe. The resulting
        tree is immutable and thread-safe.

    """

    __slots__ = (
        "_flavor",
        "_config",
        "_block_rules",
        "_inline_rules",
        "_depth",
        "_list_depth",
        "_inline_depth",
    )

    def __init__(
        self,
        flavor: Flavor,
        *,
        depth: int = 0,
        list_depth: int = 0,
        inline_depth: int = 0,
    ) -> None:
        """Initialize parser.

        Args:
            flavor: Rules to apply
            depth: Block nesting level (0 for the document)
            list_depth: Number of enclosing lists
            inline_depth: Inline nesting level

        """
        self._flavor = flavor
        self._config = get_parse_config()
        self._block_rules = flavor.block_rules
        self._inline_rules = flavor.inline_rules
        self._depth = depth
        self._list_depth = list_depth
        self._inline_depth = inline_depth

    @property
    def flavor(self) -> Flavor:
        return self._flavor

    @property
    def config(self) -> ParseConfig:
        return self._config

    @property
    def depth(self) -> int:
        """Block nesting level: 0 for the document, +1 per quote or list item."""
        return self._depth

    @property
    def list_depth(self) -> int:
        """Number of lists enclosing the blocks this parser produces."""
        return self._list_depth

    def parse(self, source: str) -> tuple[Block, ...]:
        """Parse a whole document."""
        return self.parse_blocks(split_lines(source))

    # =========================================================================
    # Block phase
    # =========================================================================

    def parse_blocks(self, lines: Sequence[Line]) -> tuple[Block, ...]:
        """Parse lines into block items.

        Blank lines separate blocks and are never emitted.
        """
        if self._depth > self._config.max_nesting:
            return self._flatten(lines)

        default_rule = self._flavor.default_rule
        items: list[Block] = []
        index = 0
        while index < len(lines):
            if lines[index].is_blank:
                index += 1
                continue
            rule = self.match_rule(lines, index) or default_rule
            item, end = self._extract_block(rule, lines, index)
            items.append(item)  # type: ignore[arg-type]
            index = end
        return tuple(items)

    def match_rule(self, lines: Sequence[Line], index: int) -> BlockRule | None:
        """First block rule of the flavor that matches ``lines[index]``.

        The flavor's default rule is not considered.
        """
        for rule in self._block_rules:
            try:
                if rule.matches(lines, index, self):
                    return rule
            except RuleError:
                raise
            except Exception as e:
                raise RuleError(rule_name(rule), f"matches() raised {type(e).__name__}: {e}") from e
        return None

    def interrupts(self, lines: Sequence[Line], index: int) -> bool:
        """Whether ``lines[index]`` opens a block other than a paragraph.

        Paragraphs and list items stop their text at such lines.
        """
        return self.match_rule(lines, index) is not None

    def descend(self, *, list_level: bool = False) -> Parser:
        """Parser for block content nested one level deeper.

        Args:
            list_level: The nested content sits inside a list item

        """
        return Parser(
            self._flavor,
            depth=self._depth + 1,
            list_depth=self._list_depth + (1 if list_level else 0),
            inline_depth=self._inline_depth,
        )

    def _extract_block(self, rule: BlockRule, lines: Sequence[Line], index: int) -> Extraction:
        try:
            extraction = rule.extract(lines, index, self)
        except RuleError:
            raise
        except Exception as e:
            raise RuleError(rule_name(rule), f"extract() raised {type(e).__name__}: {e}") from e
        if extraction.end <= index:
            raise RuleError(
                rule_name(rule),
                f"consumed no lines at line {lines[index].lineno} (end={extraction.end})",
            )
        return extraction

    def _flatten(self, lines: Sequence[Line]) -> tuple[Block, ...]:
        """Nesting-limit fallback: blank-separated runs become text paragraphs."""
        logger.debug(
            "Nesting limit %d reached; keeping %d lines as plain paragraphs",
            self._config.max_nesting,
            len(lines),
        )
        items: list[Block] = []
        index = 0
        while index < len(lines):
            if lines[index].is_blank:
                index += 1
                continue
            end = index
            while end < len(lines) and not lines[end].is_blank:
                end += 1
            chunk = lines[index:end]
            content = "\n".join(line.text.strip() for line in chunk)
            items.append(
                Paragraph(
                    raw=join_lines(chunk),
                    location=span_location(lines, index, end),
                    content=content,
                    children=(PlainText(raw=content, content=content),),
                )
            )
            index = end
        return tuple(items)

    # =========================================================================
    # Inline phase
    # =========================================================================

    def parse_inline(self, text: str) -> tuple[MarkDownItem, ...]:
        """Parse a text span into inline items.

        Text between matches becomes PlainText, so the ``raw`` texts of the
        result concatenate back to ``text``.
        """
        if not text:
            return ()
        if self._inline_depth > self._config.max_nesting:
            return (PlainText(raw=text, content=text),)

        rules = self._inline_rules
        inner = Parser(
            self._flavor,
            depth=self._depth,
            list_depth=self._list_depth,
            inline_depth=self._inline_depth + 1,
        )
        searches = [self._bind(rule, text) for rule in rules]
        # Per-rule memo of the last search: (searched_from, match)
        cache: list[tuple[int, InlineMatch | None]] = [(-1, None)] * len(rules)
        items: list[MarkDownItem] = []
        pos = 0
        length = len(text)
        while pos < length:
            best: InlineMatch | None = None
            best_rule: InlineRule | None = None
            for i, rule in enumerate(rules):
                searched_from, match = cache[i]
                if searched_from < 0 or (match is not None and match.start() < pos):
                    match = self._search(rule, searches[i], pos)
                    cache[i] = (pos, match)
                if match is None:
                    continue
                if best is None or match.start() < best.start():
                    best, best_rule = match, rule
                    if best.start() == pos:
                        break

            if best is None or best_rule is None:
                items.append(PlainText(raw=text[pos:], content=text[pos:]))
                break
            start = best.start()
            if start > pos:
                items.append(PlainText(raw=text[pos:start], content=text[pos:start]))
            items.append(self._extract_inline(best_rule, best, inner))
            pos = best.end()
        return tuple(items)

    def _bind(self, rule: InlineRule, text: str) -> Callable[[int], InlineMatch | None]:
        """Search function of ``rule`` for ``text``."""
        searcher = getattr(rule, "searcher", None)
        if searcher is None:
            return partial(rule.search, text)
        try:
            return searcher(text).search
        except RuleError:
            raise
        except Exception as e:
            raise RuleError(rule_name(rule), f"searcher() raised {type(e).__name__}: {e}") from e

    def _search(
        self, rule: InlineRule, search: Callable[[int], InlineMatch | None], pos: int
    ) -> InlineMatch | None:
        try:
            match = search(pos)
        except RuleError:
            raise
        except Exception as e:
            raise RuleError(rule_name(rule), f"search() raised {type(e).__name__}: {e}") from e
        if match is not None and (match.start() < pos or match.end() <= match.start()):
            raise RuleError(
                rule_name(rule),
                f"invalid match span ({match.start()}, {match.end()}) searching from {pos}",
            )
        return match

    def _extract_inline(self, rule: InlineRule, match: InlineMatch, inner: Parser) -> MarkDownItem:
        try:
            return rule.extract(match, inner)
        except RuleError:
            raise
        except Exception as e:
            raise RuleError(rule_name(rule), f"extract() raised {type(e).__name__}: {e}") from e
