"""
Subscription bookkeeping for the hook bus.

Three tables back every bus:

- exact hooks: hook name -> callbacks in registration order (duplicates allowed)
- pattern hooks: canonical pattern string -> compiled pattern + subscription ids
- ids: subscription id -> callback, for every subscription of either kind

Exact hooks are dispatched straight from their callback lists; pattern hooks
are dispatched by resolving their ids through the id table.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

from hookbus.events.errors import HookBusError, InvalidKeyError
from hookbus.events.ids import IdAllocator
from hookbus.logging_config import get_logger

logger = get_logger(__name__)

HookCallback = Callable[..., Any]
HookKey = Union[str, "re.Pattern[str]"]


def pattern_key(pattern: re.Pattern[str]) -> str:
    """Canonical string for a compiled pattern.

    Patterns compiled separately from the same source and flags share a key.
    """
    return f"/{pattern.pattern}/{int(pattern.flags)}"


def validate_key(key: Any) -> HookKey:
    if isinstance(key, re.Pattern):
        if not isinstance(key.pattern, str):
            raise InvalidKeyError(key, f"Pattern hooks must match text, got bytes pattern {key!r}")
        return key
    if isinstance(key, str) and key:
        return key
    raise InvalidKeyError(key)


@dataclass
class PatternEntry:
    """All subscriptions registered under one canonical pattern."""

    regex: re.Pattern[str]
    ids: list[int] = field(default_factory=list)


class HookRegistry:
    """Registration and removal of hook subscriptions."""

    def __init__(self, id_base: int = 1) -> None:
        self._allocator = IdAllocator(id_base)
        self._hooks: dict[str, list[HookCallback]] = {}
        self._patterns: dict[str, PatternEntry] = {}
        self._ids: dict[int, HookCallback] = {}

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def on(self, hook: HookKey, fn: HookCallback) -> int:
        """
        Register a callback for a hook name or a hook-name pattern.

        Args:
            hook: Exact hook name, or a compiled pattern searched against names
            fn: Callback invoked with the published arguments

        Returns:
            Subscription id, usable with :meth:`off`

        Raises:
            InvalidKeyError: ``hook`` is not a non-empty str or a str pattern
            HookBusError: ``fn`` is not callable
        """
        hook = validate_key(hook)
        if not callable(fn):
            raise HookBusError(f"Hook callback must be callable, got {type(fn).__name__}")

        hook_id = self._allocator.next()

        if isinstance(hook, re.Pattern):
            key = pattern_key(hook)
            entry = self._patterns.get(key)
            if entry is None:
                entry = PatternEntry(regex=hook)
                self._patterns[key] = entry
            entry.ids.append(hook_id)
        else:
            key = hook
            self._hooks.setdefault(hook, []).append(fn)

        self._ids[hook_id] = fn
        logger.debug("hook_registered", hook=key, id=hook_id)
        return hook_id

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def off(self, hook: HookKey, fn: HookCallback | int) -> None:
        """
        Unregister a callback from a hook.

        ``fn`` may be the subscription id returned by :meth:`on` or the
        callback itself. Given a callback, only the first id found for it in
        the id table is purged, whichever hook that id belongs to.

        Removing a pattern hook drops the whole pattern bucket, every
        subscription under it included. Removing from an exact hook drops one
        occurrence of the callback.

        Unknown hooks, ids and callbacks are ignored.
        """
        hook = validate_key(hook)

        if isinstance(fn, int) and not isinstance(fn, bool):
            callback = self._ids.pop(fn, None)
        else:
            callback = fn
            for hook_id, registered in self._ids.items():
                if registered == fn:
                    del self._ids[hook_id]
                    break

        if isinstance(hook, re.Pattern):
            key = pattern_key(hook)
            entry = self._patterns.pop(key, None)
            if entry is None:
                return
            for hook_id in entry.ids:
                self._ids.pop(hook_id, None)
            logger.debug("hook_unregistered", hook=key, removed=len(entry.ids))
            return

        fns = self._hooks.get(hook)
        if fns is None or callback is None:
            return
        try:
            fns.remove(callback)
        except ValueError:
            return
        if not fns:
            del self._hooks[hook]
        logger.debug("hook_unregistered", hook=hook)

    def _discard(self, hook: HookKey, hook_id: int) -> None:
        """Remove a single subscription, leaving the rest of a pattern bucket."""
        fn = self._ids.pop(hook_id, None)
        if fn is None:
            return

        if isinstance(hook, re.Pattern):
            key = pattern_key(hook)
            entry = self._patterns.get(key)
            if entry is None or hook_id not in entry.ids:
                return
            # replaced, not edited: a dispatch may be iterating the old list
            entry.ids = [i for i in entry.ids if i != hook_id]
            if not entry.ids:
                del self._patterns[key]
            return

        fns = self._hooks.get(hook)
        if fns is None or fn not in fns:
            return
        fns.remove(fn)
        if not fns:
            del self._hooks[hook]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _matching_pattern_fns(self, name: str) -> list[HookCallback]:
        fns: list[HookCallback] = []
        for entry in list(self._patterns.values()):
            if not entry.regex.search(name):
                continue
            for hook_id in entry.ids:
                fn = self._ids.get(hook_id)
                if fn is not None:
                    fns.append(fn)
        return fns

    def has_hook(self, name: str) -> bool:
        """True if ``name`` has exact subscribers or matches a pattern hook."""
        if name in self._hooks:
            return True
        return any(entry.regex.search(name) for entry in self._patterns.values())

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics."""
        return {
            "hooks": len(self._hooks),
            "hook_handlers": sum(len(fns) for fns in self._hooks.values()),
            "patterns": len(self._patterns),
            "pattern_handlers": sum(len(entry.ids) for entry in self._patterns.values()),
            "ids": len(self._ids),
            "last_id": self._allocator.last,
        }
