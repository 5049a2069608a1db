"""StringBuilder: list-backed string accumulation for the renderers.

Renderers append many small fragments while walking the item tree. Joining
once at the end keeps rendering linear in the output size.

Thread Safety:
A StringBuilder belongs to a single render() call and is never shared.

"""

from __future__ import annotations


class StringBuilder:
    """Collects string fragments and joins them once.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("<p>").append("Hi").append("</p>").build()
        '<p>Hi</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append ``s``; empty strings are skipped.

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)
