"""String splitting helpers with compressed delimiters."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")


def split(text: str, delimiters: str) -> list[str]:
    """Split on any of the delimiter characters, merging adjacent delimiters.

    Leading or trailing delimiters still yield an empty first or last field.
    """
    if not delimiters:
        return [text]
    pattern = "[" + re.escape(delimiters) + "]+"
    return re.split(pattern, text)


def split_whitespace(text: str) -> list[str]:
    """Split on runs of whitespace, keeping empty edge fields."""
    return _WHITESPACE.split(text)


def contains(corpus: str, pattern: str) -> bool:
    """Tell whether pattern occurs in corpus."""
    return pattern in corpus