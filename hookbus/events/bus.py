"""
Hook bus for in-process, synchronous event dispatch.

Provides:
- Exact-name and regex-pattern subscriptions
- Fire-all dispatch (``call_all``) and vetoable dispatch (``call``)
- One-shot subscriptions
- A debug ledger of every distinct hook name published
- An install-once, process-wide bus
"""

from __future__ import annotations

import functools
from typing import Any

from hookbus import config
from hookbus.config import DebugFlags, HookBusConfig
from hookbus.events.errors import HookBusError
from hookbus.events.invokers import HookInvoker, IsolatingInvoker, direct_invoke
from hookbus.events.ledger import DebugLedger
from hookbus.events.registry import HookCallback, HookKey, HookRegistry, validate_key
from hookbus.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Hook Bus
# =============================================================================


class HookBus(HookRegistry):
    """
    Registry plus dispatcher for hooks.

    Handlers are called with the positional arguments given to the publish
    call, pattern subscriptions first (pattern registration order, then
    subscription order) and exact-name subscriptions after them.

    A handler may publish, subscribe or unsubscribe while it runs.
    ``call_all`` works on a copy of the exact-name handler list; ``call``
    makes no such promise, so handlers added during a ``call`` may or may not
    run in that same dispatch.
    """

    def __init__(
        self,
        debug: DebugFlags | None = None,
        invoker: HookInvoker | None = None,
        id_base: int = 1,
    ):
        """
        Initialize hook bus.

        Args:
            debug: Debug switches; defaults to the process-wide ``config.debug``
            invoker: Trampoline used to call each handler
            id_base: First subscription id handed out
        """
        super().__init__(id_base=id_base)
        self._debug = debug if debug is not None else config.debug
        self._invoker: HookInvoker = invoker or direct_invoke
        self._ledger = DebugLedger()

    @classmethod
    def from_config(cls, cfg: HookBusConfig, isolate_errors: bool = False) -> HookBus:
        """
        Build a bus from config, optionally containing handler errors.

        The bus gets its own debug switch seeded from ``cfg.debug_hooks``;
        the process-wide ``config.debug`` is left untouched.
        """
        invoker = IsolatingInvoker(cfg.max_dead_letters) if isolate_errors else None
        return cls(
            debug=DebugFlags(hooks=cfg.debug_hooks),
            invoker=invoker,
            id_base=cfg.id_base,
        )

    @property
    def invoker(self) -> HookInvoker:
        return self._invoker

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def once(self, hook: HookKey, fn: HookCallback) -> int:
        """
        Register a callback that unsubscribes itself on its first call.

        Only this subscription is removed, even for a pattern hook.

        Returns:
            Subscription id; ``off(hook, id)`` cancels it before it fires
        """
        hook = validate_key(hook)
        if not callable(fn):
            raise HookBusError(f"Hook callback must be callable, got {type(fn).__name__}")

        hook_id = 0
        fired = False

        @functools.wraps(fn)
        def wrapper(*args: Any) -> Any:
            nonlocal fired
            if fired:
                return None
            fired = True
            self._discard(hook, hook_id)
            return fn(*args)

        hook_id = self.on(hook, wrapper)
        return hook_id

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _record(self, hook: str, args: tuple[Any, ...]) -> None:
        if not self._debug.hooks:
            return
        logger.debug("hook_called", hook=hook, args=args)
        self._ledger.record(hook)

    def call_all(self, hook: str, *args: Any) -> bool:
        """
        Call every handler of a hook, ignoring their return values.

        Args:
            hook: Hook name being published
            *args: Arguments passed to every handler

        Returns:
            Always True; ``call_all`` cannot be vetoed
        """
        self._record(hook, args)

        for entry in list(self._patterns.values()):
            if not entry.regex.search(hook):
                continue
            for hook_id in entry.ids:
                fn = self._ids.get(hook_id)
                if fn is None:
                    continue
                self._invoker(hook, fn, args)

        if hook not in self._hooks:
            return True
        for fn in list(self._hooks[hook]):
            self._invoker(hook, fn, args)
        return True

    def call(self, hook: str, *args: Any) -> bool:
        """
        Call handlers of a hook until one returns ``False``.

        A handler returning exactly ``False`` marks the event as handled and
        no later handler runs. Any other value, awaitables included, lets
        dispatch continue.

        Args:
            hook: Hook name being published
            *args: Arguments passed to each handler

        Returns:
            False if a handler vetoed, True otherwise (no handlers included)
        """
        self._record(hook, args)

        fns = self._matching_pattern_fns(hook)
        exact = self._hooks.get(hook)
        if exact is None and not fns:
            return True
        if exact is not None:
            fns.extend(exact)

        for fn in fns:
            if self._invoker(hook, fn, args) is False:
                return False
        return True

    # -------------------------------------------------------------------------
    # Ledger & Stats
    # -------------------------------------------------------------------------

    @property
    def ledger(self) -> DebugLedger:
        return self._ledger

    def all_unique_hooks(self) -> list[str]:
        """Every distinct hook name published while hook debugging was on."""
        return self._ledger.all_unique_names()

    def get_stats(self) -> dict[str, Any]:
        """Get hook bus statistics."""
        stats = super().get_stats()
        stats["debug_hooks"] = self._debug.hooks
        stats["ledger_size"] = len(self._ledger)
        return stats


# =============================================================================
# Global Instance
# =============================================================================

_hook_bus: HookBus | None = None


def install(bus: HookBus | None = None) -> HookBus:
    """
    Install the process-wide hook bus.

    Installing twice is a no-op: the bus installed first is kept and
    returned, and ``bus`` is ignored.
    """
    global _hook_bus
    if _hook_bus is not None:
        if bus is not None and bus is not _hook_bus:
            logger.debug("hook_bus_already_installed")
        return _hook_bus
    _hook_bus = bus if bus is not None else HookBus()
    logger.debug("hook_bus_installed")
    return _hook_bus


def uninstall() -> HookBus | None:
    """Remove the process-wide hook bus and return it."""
    global _hook_bus
    bus, _hook_bus = _hook_bus, None
    return bus


def get_hook_bus() -> HookBus:
    """Get the installed hook bus, installing a fresh one on first use."""
    if _hook_bus is None:
        return install()
    return _hook_bus


# =============================================================================
# Convenience Functions
# =============================================================================


def on(hook: HookKey, fn: HookCallback | None = None):
    """
    Subscribe to a hook (can be used as decorator).

    Usage:
        @on("combat.start")
        def on_combat(combat):
            ...

        # Or:
        hook_id = on(re.compile(r"^combat\\."), handler)
    """
    bus = get_hook_bus()

    if fn is not None:
        return bus.on(hook, fn)

    def decorator(func: HookCallback) -> HookCallback:
        bus.on(hook, func)
        return func

    return decorator


def once(hook: HookKey, fn: HookCallback | None = None):
    """Subscribe to the next call of a hook only (can be used as decorator)."""
    bus = get_hook_bus()

    if fn is not None:
        return bus.once(hook, fn)

    def decorator(func: HookCallback) -> HookCallback:
        bus.once(hook, func)
        return func

    return decorator


def off(hook: HookKey, fn: HookCallback | int) -> None:
    """Unsubscribe from a hook by subscription id or callback."""
    get_hook_bus().off(hook, fn)


def call_all(hook: str, *args: Any) -> bool:
    """Call every handler of a hook."""
    return get_hook_bus().call_all(hook, *args)


def call(hook: str, *args: Any) -> bool:
    """Call handlers of a hook until one vetoes."""
    return get_hook_bus().call(hook, *args)
