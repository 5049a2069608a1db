"""Source location tracking for block items.

Block-level items remember which lines of the original input they were
built from. Offsets always refer to the original source string, even for
items produced by nested parses (block quotes, list items), because the
tokenizer carries offsets through every dedent.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a block item in the source text.

    Line numbers are 1-indexed; offsets are 0-indexed positions into the
    original source string.

    Attributes:
        lineno: First line of the item
        end_lineno: Last line of the item
        offset: Absolute start offset in the source
        end_offset: Absolute end offset in the source (exclusive)

    Examples:
        >>> loc = SourceLocation(lineno=1, end_lineno=2, offset=0, end_offset=12)
        >>> str(loc)
        '1-2'

    """

    lineno: int
    end_lineno: int
    offset: int = 0
    end_offset: int = 0

    def __str__(self) -> str:
        """Format location for debugging output.

        Returns:
            "3" for a single line, "3-7" for a line range
        """
        if self.lineno == self.end_lineno:
            return str(self.lineno)
        return f"{self.lineno}-{self.end_lineno}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location for synthesized items."""
        return cls(lineno=0, end_lineno=0)
