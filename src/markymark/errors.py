"""Exception classes for markymark.

Parsing Markdown never raises: malformed input degrades to plain text.
These exceptions cover the contracts around the parser instead, namely
misbehaving rules, unknown flavors, bad configuration and renderers
that meet items they cannot handle.
"""

from __future__ import annotations


class MarkyMarkError(Exception):
    """Base exception for all markymark errors."""

    pass


class RuleError(MarkyMarkError):
    """A rule violated its contract or failed while matching.

    Raised when a block rule consumes no lines, an inline rule reports an
    empty match, or a rule raises while being applied. The original
    exception, if any, is chained as ``__cause__``.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        """Initialize rule error.

        Args:
            rule_name: Name of the offending rule
            message: Description of the violation
        """
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}': {message}")


class FlavorError(MarkyMarkError):
    """Unknown flavor name or invalid flavor definition."""

    def __init__(self, flavor_name: str, message: str) -> None:
        """Initialize flavor error.

        Args:
            flavor_name: Name of the flavor involved
            message: Description of the problem
        """
        self.flavor_name = flavor_name
        super().__init__(f"Flavor '{flavor_name}': {message}")


class ConfigError(MarkyMarkError):
    """Invalid ParseConfig value."""

    pass


class RenderError(MarkyMarkError):
    """Error during rendering.

    Raised when a renderer receives an item type it has no handler for.
    """

    pass
