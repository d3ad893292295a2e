"""
Error types for the hook registry.
"""

from __future__ import annotations

from typing import Any


class HookBusError(Exception):
    """Base error for hook registry operations."""


class InvalidKeyError(HookBusError):
    """Raised when a hook key is neither a non-empty name nor a text pattern."""

    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        self.message = message or (
            f"Hook key must be a non-empty str or a compiled str pattern, got {key!r}"
        )
        super().__init__(self.message)
