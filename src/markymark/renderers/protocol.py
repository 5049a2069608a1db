"""Renderer protocol: the boundary between the parser and its consumers.

A renderer takes the item sequence returned by ``MarkyMark.parse_markdown``
and turns it into an artifact: a string, a widget tree, a styled buffer.
Styling is supplied when the renderer is constructed, never stored in the
items. The built-in ``HtmlRenderer`` and ``TextRenderer`` are reference
implementations.

Example:
    from markymark.renderers.protocol import Renderer

    def publish(renderer: Renderer[str], items: Sequence[MarkDownItem]) -> str:
        return renderer.render(items)

"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from markymark.nodes import MarkDownItem


@runtime_checkable
class Renderer[T](Protocol):
    """Protocol for item-tree renderers.

    Implementations accept the parsed items and return their artifact. The
    parser makes no assumption about which renderer is used.

    """

    def render(self, items: Sequence[MarkDownItem]) -> T:
        """Render parsed items.

        Args:
            items: Items in document order, as returned by the parser.

        Returns:
            The rendered artifact.

        """
        ...
