"""Decimal text for every coordinate a render can emit.

Rect emission needs the text of x, y and run width for every rect, so the
ASCII form of 0..max(width, height) is built once per render and indexed
directly afterwards.
"""

from __future__ import annotations

from typing import Tuple

NumberTextCache = Tuple[bytes, ...]


def build_number_cache(max_value: int) -> NumberTextCache:
    """Return ASCII decimal text for every integer in ``0..max_value``.

    >>> build_number_cache(3)
    (b'0', b'1', b'2', b'3')
    """
    return tuple(str(n).encode("ascii") for n in range(max_value + 1))
