"""
Subscription id allocation.
"""

from __future__ import annotations

import itertools


class IdAllocator:
    """Hands out strictly increasing integer ids, never reusing one."""

    def __init__(self, base: int = 1) -> None:
        self._counter = itertools.count(base)
        self._last: int | None = None

    def next(self) -> int:
        self._last = next(self._counter)
        return self._last

    @property
    def last(self) -> int | None:
        """Most recently issued id, or None if none was issued yet."""
        return self._last
