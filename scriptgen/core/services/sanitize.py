"""
Script name sanitizer.

Keeps only ``[A-Za-z0-9_-]`` so the name is safe both as a filename and
as the ``# Script:`` header value.
"""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")


class InvalidNameError(ValueError):
    """Raised when no usable script name remains after sanitizing."""


def sanitize_name(raw: str) -> str:
    """Strip every character outside ``[A-Za-z0-9_-]``.

    >>> sanitize_name("my tool!.sh")
    'mytoolsh'
    """
    return _DISALLOWED.sub("", raw)


def require_name(raw: str | None) -> str:
    """Sanitize *raw* and insist that something is left.

    Raises:
        InvalidNameError: If *raw* is missing, or every character in it
            was disallowed.
    """
    if not raw:
        raise InvalidNameError("Script name is required. Use -n or --name option.")

    clean = sanitize_name(raw)
    if not clean:
        raise InvalidNameError(
            f"Script name {raw!r} has no usable characters "
            "(allowed: letters, digits, '_' and '-')."
        )
    return clean
