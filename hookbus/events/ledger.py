"""
Debug ledger of published hook names.

Only written while hook debugging is enabled; the dispatcher never reads it.
"""

from __future__ import annotations

from collections.abc import Iterator


class DebugLedger:
    """Append-only, insertion-ordered set of hook names."""

    def __init__(self) -> None:
        # dict keys keep first-insertion order
        self._names: dict[str, None] = {}

    def record(self, name: str) -> None:
        self._names.setdefault(name, None)

    def all_unique_names(self) -> list[str]:
        """Return every recorded name in first-recorded order."""
        return list(self._names)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)
