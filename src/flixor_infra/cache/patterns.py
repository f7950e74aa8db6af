"""Glob-style key patterns for bulk invalidation."""

from __future__ import annotations

import re


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` glob into an anchored regex.

    ``*`` matches zero or more characters; every other character, including
    ``.``, ``?`` and brackets, matches itself literally.
    """
    parts = (".*" if char == "*" else re.escape(char) for char in pattern)
    return re.compile("".join(parts), re.DOTALL)


def matches(regex: re.Pattern[str], key: str) -> bool:
    """Return True if ``key`` fully matches the compiled pattern."""
    return regex.fullmatch(key) is not None
