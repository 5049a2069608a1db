"""MarkyMark: the parsing engine.

Holds one Flavor (including consumer-added rules) and one ParseConfig, and
turns Markdown text into a tuple of MarkDownItem blocks.

Thread Safety:
The flavor is an immutable value. ``add_rule`` builds a new flavor and swaps
the reference under a lock, so a parse running in another thread keeps
using the rule set it started with. Configuration is published through a
ContextVar for the duration of each parse and restored afterwards.

"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from markymark.config import ParseConfig, parse_config_context
from markymark.flavors import Flavor, resolve_flavor
from markymark.nodes import Block, MarkDownItem
from markymark.parser import Parser
from markymark.rules.protocol import Rule, rule_name
from markymark.utils.logger import get_logger

logger = get_logger(__name__)


class MarkyMark:
    """Markdown parser bound to a flavor.

    Usage:
        >>> mm = MarkyMark()
        >>> items = mm.parse_markdown("# Title\\n\\nSome *text*")
        >>> [str(item.item_type) for item in items]
        ['header', 'paragraph']

        >>> # Consumer rules take precedence over the flavor's own
        >>> mm = MarkyMark("core").add_rule(MyBoldRule())

    Thread Safety:
        ``parse_markdown`` is safe to call from many threads at once.
        ``add_rule`` is synchronized; parses already running are unaffected.

    """

    __slots__ = ("_flavor", "_config", "_lock")

    def __init__(
        self,
        flavor: Flavor | str | None = None,
        *,
        rules: Iterable[Rule] = (),
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            flavor: A Flavor, a registered flavor name, or None for the
                default flavor
            rules: Consumer rules to add, in precedence order
            config: Parse configuration (defaults to ParseConfig())

        Raises:
            FlavorError: If ``flavor`` names an unregistered flavor
            TypeError: If one of ``rules`` is not a rule

        """
        self._flavor = resolve_flavor(flavor).with_rules(rules)
        self._config = config if config is not None else ParseConfig()
        self._lock = threading.Lock()

    @property
    def flavor(self) -> Flavor:
        """Current flavor, consumer rules included."""
        return self._flavor

    @property
    def config(self) -> ParseConfig:
        return self._config

    def add_rule(self, rule: Rule) -> MarkyMark:
        """Add a rule that takes precedence over the flavor's own rules.

        Rules added earlier keep precedence over rules added later.

        Returns:
            self for method chaining

        Raises:
            TypeError: If ``rule`` is not a block or inline rule

        """
        with self._lock:
            self._flavor = self._flavor.with_rule(rule)
        logger.debug("Registered rule %r on engine", rule_name(rule))
        return self

    def parse_markdown(self, text: str) -> tuple[Block, ...]:
        """Parse Markdown text into block items in source order.

        Never raises for malformed Markdown; unmatched syntax degrades to
        plain text.

        Raises:
            RuleError: If a rule breaks its contract or fails

        """
        flavor = self._flavor
        with parse_config_context(self._config):
            return Parser(flavor).parse(text)

    def parse_inline(self, text: str) -> tuple[MarkDownItem, ...]:
        """Parse a text span with the inline rules only."""
        flavor = self._flavor
        with parse_config_context(self._config):
            return Parser(flavor).parse_inline(text)

    def parse_many(self, texts: Iterable[str]) -> list[tuple[Block, ...]]:
        """Parse several documents with one flavor snapshot and one config context.

        Example:
            >>> docs = MarkyMark().parse_many(["# One", "# Two"])
            >>> len(docs)
            2

        """
        flavor = self._flavor
        with parse_config_context(self._config):
            return [Parser(flavor).parse(text) for text in texts]

    def __call__(self, text: str) -> tuple[Block, ...]:
        """Shorthand for ``parse_markdown``."""
        return self.parse_markdown(text)

    def __repr__(self) -> str:
        return f"MarkyMark(flavor={self._flavor.name!r})"
