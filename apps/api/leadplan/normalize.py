"""Free-text list normalization."""

from __future__ import annotations

import re
from typing import Sequence


_SEPARATORS = re.compile(r"[,\n]")


def parse_list(value: str | None, fallback: Sequence[str] | None = None) -> list[str]:
    """Split a comma or newline separated string into trimmed items.

    Empty segments are dropped. When ``value`` is missing or yields no
    items, a copy of ``fallback`` is returned (``[]`` without one).

    >>> parse_list("a, b\\nc")
    ['a', 'b', 'c']
    >>> parse_list("", ["x"])
    ['x']
    """
    items = [item.strip() for item in _SEPARATORS.split(value or "")]
    items = [item for item in items if item]
    if items:
        return items
    return list(fallback) if fallback else []
