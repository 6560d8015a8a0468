"""Substring search and word splitting used by the XPM reader."""

from __future__ import annotations

import re

_WORD_SEPARATORS = re.compile(r"[ \t]+")


def _terminated(text: str) -> str:
    """Return the part of ``text`` before its first NUL character."""
    return text.split("\0", 1)[0]


def find(text: str, needle: str, limit: int) -> int:
    """Return the position of ``needle`` in ``text``, or -1.

    The search fails at once when the needle is longer than ``limit``.
    """
    if not needle:
        raise ValueError("needle must not be empty")
    if len(needle) > limit:
        return -1
    return _terminated(text).find(needle)


def find_unquoted(text: str, needle: str, limit: int) -> int:
    """Like :func:`find`, but ignore matches inside double-quoted strings."""
    if not needle:
        raise ValueError("needle must not be empty")
    if len(needle) > limit:
        return -1
    text = _terminated(text)
    quoted = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(_terminated(text)) if word]