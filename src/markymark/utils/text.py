"""Text helpers shared by the renderers.

Example:
    >>> from markymark.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import html as html_module
import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert text to a URL-safe anchor slug.

    Keeps Unicode word characters so headings in any script produce a
    usable anchor.

    Args:
        text: Text to slugify
        separator: Character to use between words

    Returns:
        Lowercase slug

    Examples:
        >>> slugify("Test & Code")
        'test-code'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""
    text = html_module.unescape(text).lower().strip()
    text = _NON_WORD.sub("", text)
    text = _SEPARATORS.sub(separator, text)
    return text.strip(separator)


def html_escape(text: str) -> str:
    """Escape <, >, & and double quotes, leaving single quotes alone."""
    return html_module.escape(text, quote=False).replace('"', "&quot;")
