"""Tests for the process-wide bus and module-level helpers."""
import re

from hookbus import events
from hookbus.events import HookBus, get_hook_bus, install, uninstall


def test_install_is_idempotent(global_bus):
    first = install()
    second = install()
    assert first is second


def test_install_keeps_first_bus(global_bus):
    mine = HookBus()
    assert install(mine) is mine
    assert install(HookBus()) is mine
    assert get_hook_bus() is mine


def test_get_hook_bus_installs_on_first_use(global_bus):
    bus = get_hook_bus()
    assert install() is bus


def test_uninstall_returns_bus(global_bus):
    bus = install()
    assert uninstall() is bus
    assert uninstall() is None
    assert get_hook_bus() is not bus


def test_install_twice_does_not_double_dispatch(global_bus):
    seen = []
    events.on("roll", lambda *args: seen.append(args))
    install()
    install(HookBus())
    events.call_all("roll", 6)
    assert seen == [(6,)]


def test_module_helpers_delegate(global_bus):
    seen = []
    hook_id = events.on("roll", lambda *args: seen.append("a"))
    assert isinstance(hook_id, int)
    events.on(re.compile(r"^roll"), lambda *args: False)
    assert events.call("roll") is False
    assert events.call_all("roll") is True
    events.off("roll", hook_id)
    events.call_all("roll")
    assert seen == ["a"]


def test_on_as_decorator(global_bus):
    seen = []

    @events.on("roll")
    def handler(value):
        seen.append(value)

    assert callable(handler)
    events.call_all("roll", 4)
    assert seen == [4]


def test_once_as_decorator(global_bus):
    seen = []

    @events.once(re.compile(r"^combat\."))
    def handler(value):
        seen.append(value)

    events.call_all("combat.start", 1)
    events.call_all("combat.end", 2)
    assert seen == [1]
    assert handler(3) is None
    assert seen == [1, 3]
