"""Loggers under the ``markymark`` namespace.

Every module logs through ``get_logger(__name__)``, so the whole library can
be silenced or made verbose from one place:

    >>> import logging
    >>> logging.getLogger("markymark").setLevel(logging.DEBUG)

Messages are debug level (rule registration, nesting-limit fallbacks,
custom render handlers). No handlers are installed here; configuring output
is left to the application.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, moved under ``markymark.`` when outside it.

    Module names inside the package are used unchanged; anything else
    (a consumer rule module, a test) becomes a child of the package logger.

    Example:
        >>> get_logger("mentions").name
        'markymark.mentions'
        >>> get_logger("markymark.parser").name
        'markymark.parser'
    """
    if not (name == "markymark" or name.startswith("markymark.")):
        name = f"markymark.{name}"
    return logging.getLogger(name)
