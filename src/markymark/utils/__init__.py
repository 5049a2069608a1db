"""Utility modules for markymark.

Provides:
- logger: get_logger for logging
- text: slugify, html_escape for the renderers
"""

from markymark.utils.logger import get_logger
from markymark.utils.text import html_escape, slugify

__all__ = [
    "get_logger",
    "html_escape",
    "slugify",
]
