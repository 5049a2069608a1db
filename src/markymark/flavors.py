"""Flavors: named, ordered rule sets defining one Markdown dialect.

A Flavor is immutable. Its rule order is its precedence: for block rules the
first rule whose ``matches`` returns True wins, for inline rules the earlier
rule wins when two matches start at the same offset.

Rules added by a consumer are kept apart from the flavor's own rules and are
tried before them, in the order they were added. That is the override
mechanism: a consumer rule for ``**bold**`` shadows the built-in BoldRule.
Rules can only be added, never removed.

Built-in Flavors:
- contentful: the default dialect (headers, rules, fences, quotes, tables,
  bullet/numbered/lettered lists, emphasis, strikethrough, links, images)
- core: contentful without tables, lettered lists and strikethrough

Usage:
    >>> flavor = get_flavor("contentful").with_rule(MyRule())
    >>> [rule_name(r) for r in flavor.block_rules][:2]
    ['my_rule', 'header']

    >>> flavor = (
    ...     FlavorBuilder("notes")
    ...     .add_rules([HeaderRule(), UnorderedListRule()])
    ...     .add_rule(ItalicRule())
    ...     .build()
    ... )

Thread Safety:
Flavors and rules are immutable and can be shared across threads.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from markymark.errors import FlavorError
from markymark.rules import (
    AlphabeticalListRule,
    BlockRule,
    BoldRule,
    CodeBlockRule,
    EscapeRule,
    HeaderRule,
    HorizontalLineRule,
    ImageRule,
    InlineCodeRule,
    InlineRule,
    ItalicRule,
    LineBreakRule,
    LinkRule,
    OrderedListRule,
    ParagraphRule,
    Phase,
    QuoteRule,
    StrikethroughRule,
    TableRule,
    UnorderedListRule,
    rule_name,
)
from markymark.rules.protocol import Rule
from markymark.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FLAVOR = "contentful"


def _check_rule(rule: object) -> Phase:
    """Validate a rule object and return its phase."""
    phase = getattr(rule, "phase", None)
    if phase is Phase.BLOCK:
        if not isinstance(rule, BlockRule):
            raise TypeError(
                f"{type(rule).__name__} declares the block phase but does not "
                "implement matches() and extract()"
            )
        return phase
    if phase is Phase.INLINE:
        if not isinstance(rule, InlineRule):
            raise TypeError(
                f"{type(rule).__name__} declares the inline phase but does not "
                "implement search() and extract()"
            )
        return phase
    raise TypeError(f"{type(rule).__name__} is not a rule: missing or invalid 'phase' attribute")


@dataclass(frozen=True, slots=True)
class Flavor:
    """Immutable, ordered rule set.

    Attributes:
        name: Flavor identifier
        default_block_rules: The flavor's own block rules, in precedence order
        default_inline_rules: The flavor's own inline rules, in precedence order
        default_rule: Fallback block rule for lines no other rule claims
        added_block_rules: Consumer block rules, tried before the defaults
        added_inline_rules: Consumer inline rules, tried before the defaults

    """

    name: str
    default_block_rules: tuple[BlockRule, ...] = ()
    default_inline_rules: tuple[InlineRule, ...] = ()
    default_rule: BlockRule = field(default_factory=ParagraphRule)
    added_block_rules: tuple[BlockRule, ...] = ()
    added_inline_rules: tuple[InlineRule, ...] = ()

    @property
    def block_rules(self) -> tuple[BlockRule, ...]:
        """Block rules in the order they are tried."""
        return self.added_block_rules + self.default_block_rules

    @property
    def inline_rules(self) -> tuple[InlineRule, ...]:
        """Inline rules in the order they are tried."""
        return self.added_inline_rules + self.default_inline_rules

    def with_rule(self, rule: Rule) -> Flavor:
        """Return a copy with ``rule`` added ahead of the flavor's own rules.

        Rules added earlier keep precedence over rules added later.

        Raises:
            TypeError: If ``rule`` is not a block or inline rule

        """
        if _check_rule(rule) is Phase.BLOCK:
            added = Flavor(
                name=self.name,
                default_block_rules=self.default_block_rules,
                default_inline_rules=self.default_inline_rules,
                default_rule=self.default_rule,
                added_block_rules=(*self.added_block_rules, rule),  # type: ignore[arg-type]
                added_inline_rules=self.added_inline_rules,
            )
        else:
            added = Flavor(
                name=self.name,
                default_block_rules=self.default_block_rules,
                default_inline_rules=self.default_inline_rules,
                default_rule=self.default_rule,
                added_block_rules=self.added_block_rules,
                added_inline_rules=(*self.added_inline_rules, rule),  # type: ignore[arg-type]
            )
        logger.debug("Added %s rule %r to flavor %r", rule.phase.value, rule_name(rule), self.name)
        return added

    def with_rules(self, rules: Iterable[Rule]) -> Flavor:
        """Return a copy with every rule of ``rules`` added in order."""
        flavor = self
        for rule in rules:
            flavor = flavor.with_rule(rule)
        return flavor


class FlavorBuilder:
    """Mutable builder for Flavor.

    Rules given to the builder become the flavor's own rules, in the order
    they were added. Use Flavor.with_rule to add overriding rules later.

    Example:
        >>> flavor = FlavorBuilder("tiny").add_rule(HeaderRule()).build()
        >>> flavor.block_rules
        (HeaderRule(),)

    """

    __slots__ = ("_name", "_block_rules", "_inline_rules", "_default_rule")

    def __init__(self, name: str) -> None:
        self._name = name
        self._block_rules: list[BlockRule] = []
        self._inline_rules: list[InlineRule] = []
        self._default_rule: BlockRule = ParagraphRule()

    def add_rule(self, rule: Rule) -> FlavorBuilder:
        """Append a rule to the block or inline list, depending on its phase.

        Returns:
            self for method chaining

        Raises:
            TypeError: If ``rule`` is not a block or inline rule

        """
        if _check_rule(rule) is Phase.BLOCK:
            self._block_rules.append(rule)  # type: ignore[arg-type]
        else:
            self._inline_rules.append(rule)  # type: ignore[arg-type]
        return self

    def add_rules(self, rules: Iterable[Rule]) -> FlavorBuilder:
        """Append several rules in order.

        Returns:
            self for method chaining

        """
        for rule in rules:
            self.add_rule(rule)
        return self

    def default_rule(self, rule: BlockRule) -> FlavorBuilder:
        """Replace the paragraph fallback.

        Returns:
            self for method chaining

        """
        if _check_rule(rule) is not Phase.BLOCK:
            raise TypeError(f"default rule must be a block rule, got {type(rule).__name__}")
        self._default_rule = rule
        return self

    def build(self) -> Flavor:
        """Build the immutable flavor."""
        return Flavor(
            name=self._name,
            default_block_rules=tuple(self._block_rules),
            default_inline_rules=tuple(self._inline_rules),
            default_rule=self._default_rule,
        )


# =============================================================================
# Registry
# =============================================================================

# Registry of built-in flavors: name -> factory
BUILTIN_FLAVORS: dict[str, Callable[[], Flavor]] = {}


def register_flavor(name: str) -> Callable[[Callable[[], Flavor]], Callable[[], Flavor]]:
    """Decorator to register a flavor factory.

    Args:
        name: Flavor name for lookup

    Returns:
        Decorator function that registers and returns the factory

    Usage:
        @register_flavor("minimal")
        def minimal() -> Flavor:
            return FlavorBuilder("minimal").add_rule(HeaderRule()).build()

    """

    def decorator(factory: Callable[[], Flavor]) -> Callable[[], Flavor]:
        if name in BUILTIN_FLAVORS:
            logger.debug("Replacing registered flavor %r", name)
        BUILTIN_FLAVORS[name] = factory
        return factory

    return decorator


def get_flavor(name: str) -> Flavor:
    """Get a flavor by name.

    Args:
        name: Flavor name (e.g., "contentful", "core")

    Returns:
        A new Flavor instance

    Raises:
        FlavorError: If the flavor name is not registered

    """
    if name not in BUILTIN_FLAVORS:
        available = ", ".join(sorted(BUILTIN_FLAVORS.keys()))
        raise FlavorError(name, f"unknown flavor. Available: {available}")
    return BUILTIN_FLAVORS[name]()


def resolve_flavor(flavor: Flavor | str | None) -> Flavor:
    """Turn a Flavor, a registered name, or None (default) into a Flavor."""
    if flavor is None:
        return get_flavor(DEFAULT_FLAVOR)
    if isinstance(flavor, str):
        return get_flavor(flavor)
    if isinstance(flavor, Flavor):
        return flavor
    raise TypeError(f"flavor must be a Flavor, a flavor name or None, got {type(flavor).__name__}")


@register_flavor("contentful")
def contentful() -> Flavor:
    """The default dialect."""
    return (
        FlavorBuilder("contentful")
        .add_rules(
            [
                HeaderRule(),
                HorizontalLineRule(),
                CodeBlockRule(),
                QuoteRule(),
                TableRule(),
                UnorderedListRule(),
                OrderedListRule(),
                AlphabeticalListRule(),
            ]
        )
        .add_rules(
            [
                EscapeRule(),
                InlineCodeRule(),
                ImageRule(),
                LinkRule(),
                BoldRule(),
                ItalicRule(),
                StrikethroughRule(),
                LineBreakRule(),
            ]
        )
        .build()
    )


@register_flavor("core")
def core() -> Flavor:
    """Headers, rules, fences, quotes, bullet and numbered lists, basic inline."""
    return (
        FlavorBuilder("core")
        .add_rules(
            [
                HeaderRule(),
                HorizontalLineRule(),
                CodeBlockRule(),
                QuoteRule(),
                UnorderedListRule(),
                OrderedListRule(),
            ]
        )
        .add_rules(
            [
                EscapeRule(),
                InlineCodeRule(),
                ImageRule(),
                LinkRule(),
                BoldRule(),
                ItalicRule(),
                LineBreakRule(),
            ]
        )
        .build()
    )


__all__ = [
    "BUILTIN_FLAVORS",
    "DEFAULT_FLAVOR",
    "Flavor",
    "FlavorBuilder",
    "get_flavor",
    "register_flavor",
    "resolve_flavor",
]
