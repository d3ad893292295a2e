"""
Handler invocation trampolines.

The bus calls every handler through an invoker. The default lets handler
exceptions escape and abort the dispatch; :class:`IsolatingInvoker` contains
them, logs them and keeps them in a dead-letter list.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence
from typing import Any

from hookbus.logging_config import get_logger

logger = get_logger(__name__)

HookInvoker = Callable[[str, Callable[..., Any], Sequence[Any]], Any]


def direct_invoke(hook: str, fn: Callable[..., Any], args: Sequence[Any]) -> Any:
    return fn(*args)


def _handler_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class IsolatingInvoker:
    """
    Invoker that keeps one failing handler from breaking a dispatch.

    A handler that raises is treated as having returned None, so it never
    vetoes a ``call``.

    Args:
        max_dead_letters: Failures kept for inspection, oldest dropped first
    """

    def __init__(self, max_dead_letters: int = 1000):
        self._dead_letter: deque[tuple[str, Callable[..., Any], Exception]] = deque(
            maxlen=max_dead_letters
        )

    def __call__(self, hook: str, fn: Callable[..., Any], args: Sequence[Any]) -> Any:
        try:
            return fn(*args)
        except Exception as e:
            logger.exception(
                "hook_handler_error",
                hook=hook,
                handler=_handler_name(fn),
            )
            self._dead_letter.append((hook, fn, e))
            return None

    def get_dead_letters(self, limit: int = 100) -> list[tuple[str, str, str]]:
        """Get recent failures as ``(hook, handler name, error)`` tuples."""
        items = list(self._dead_letter)[-limit:] if limit > 0 else []
        return [(hook, _handler_name(fn), str(error)) for hook, fn, error in items]

    def clear(self) -> None:
        self._dead_letter.clear()

    def __len__(self) -> int:
        return len(self._dead_letter)
