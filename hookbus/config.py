"""
Configuration for hookbus.

Holds the process-wide debug switch consulted by every bus on publish and the
environment-driven settings used to configure logging and new buses.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = ("1", "true", "True")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default) in _TRUTHY


@dataclass
class DebugFlags:
    """Debug switches read at publish time.

    Attributes:
        hooks: Record every published hook name in the ledger and log its args
    """

    hooks: bool = False


debug = DebugFlags(hooks=_env_flag("HOOKBUS_DEBUG_HOOKS"))


def set_debug_hooks(enabled: bool) -> None:
    """Toggle hook debugging for the whole process."""
    debug.hooks = bool(enabled)


@dataclass
class HookBusConfig:
    """
    Settings for a hook bus and its logging.

    Args:
        debug_hooks: Initial value of the process-wide hook debug switch
        log_level: Log level name for structlog/stdlib logging
        json_logs: Render logs as JSON instead of console output
        id_base: First subscription id handed out
        max_dead_letters: Capacity of an isolating invoker's dead-letter list
    """

    debug_hooks: bool = False
    log_level: str = "INFO"
    json_logs: bool = False
    id_base: int = 1
    max_dead_letters: int = 1000

    def __post_init__(self):
        if self.max_dead_letters < 1:
            raise ValueError("max_dead_letters must be at least 1")

    @classmethod
    def from_env(cls) -> HookBusConfig:
        """Build a config from ``HOOKBUS_*`` environment variables."""
        return cls(
            debug_hooks=_env_flag("HOOKBUS_DEBUG_HOOKS"),
            log_level=os.environ.get("HOOKBUS_LOG_LEVEL", "INFO").upper(),
            json_logs=_env_flag("HOOKBUS_LOG_JSON"),
            id_base=int(os.environ.get("HOOKBUS_ID_BASE", "1")),
            max_dead_letters=int(os.environ.get("HOOKBUS_MAX_DEAD_LETTERS", "1000")),
        )
