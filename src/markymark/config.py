"""ContextVar-based parse configuration for markymark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The engine publishes its config for the duration of one parse; rules read
it through get_parse_config() instead of carrying their own settings, which
keeps every rule stateless.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Through the engine (normal use)
    mm = MarkyMark(config=ParseConfig(hard_line_breaks=False))
    items = mm.parse_markdown("one\\ntwo")

    # Direct parser usage
    with parse_config_context(ParseConfig(max_nesting=8)):
        items = Parser(flavor).parse(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from markymark.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        max_nesting: Maximum depth of nested block quotes, lists and inline
            emphasis. Deeper content degrades to plain paragraphs or text.
        tab_width: Column width of a tab when measuring indentation
        hard_line_breaks: Treat every newline inside a paragraph as a line
            break. When False only backslash-newline and two trailing spaces
            break the line.

    """

    max_nesting: int = 32
    tab_width: int = 4
    hard_line_breaks: bool = True

    def __post_init__(self) -> None:
        if self.max_nesting < 1:
            raise ConfigError(f"max_nesting must be >= 1, got {self.max_nesting}")
        if self.tab_width < 1:
            raise ConfigError(f"tab_width must be >= 1, got {self.tab_width}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({"tab_width": 2, "unknown": 1})
            >>> config.tab_width
            2

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "markymark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised, so nested
    uses (an engine parsing from inside a custom rule) behave.

    Example:
        >>> with parse_config_context(ParseConfig(tab_width=2)):
        ...     get_parse_config().tab_width
        2

    """
    token = _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.reset(token)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
