"""
Hook registry module.

Provides an in-process hook bus: exact-name and pattern subscriptions,
fire-all and vetoable dispatch, and a debug ledger of published hooks.
"""

from hookbus.events.bus import (
    HookBus,
    call,
    call_all,
    get_hook_bus,
    install,
    off,
    on,
    once,
    uninstall,
)
from hookbus.events.errors import HookBusError, InvalidKeyError
from hookbus.events.ids import IdAllocator
from hookbus.events.invokers import IsolatingInvoker, direct_invoke
from hookbus.events.ledger import DebugLedger
from hookbus.events.registry import HookRegistry, PatternEntry, pattern_key

__all__ = [
    "DebugLedger",
    "HookBus",
    "HookBusError",
    "HookRegistry",
    "IdAllocator",
    "InvalidKeyError",
    "IsolatingInvoker",
    "PatternEntry",
    "call",
    "call_all",
    "direct_invoke",
    "get_hook_bus",
    "install",
    "off",
    "on",
    "once",
    "pattern_key",
    "uninstall",
]
