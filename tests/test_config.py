"""Tests for configuration and logging setup."""
import pytest

from hookbus import config
from hookbus.config import DebugFlags, HookBusConfig
from hookbus.events import HookBus, IsolatingInvoker
from hookbus import logging_config
from hookbus.logging_config import configure_from_config, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_debug():
    previous = config.debug.hooks
    yield
    config.set_debug_hooks(previous)
    configure_logging(level="DEBUG", colors=False)


def test_config_defaults():
    cfg = HookBusConfig()
    assert cfg.debug_hooks is False
    assert cfg.log_level == "INFO"
    assert cfg.json_logs is False
    assert cfg.id_base == 1
    assert cfg.max_dead_letters == 1000


def test_config_rejects_empty_dead_letters():
    with pytest.raises(ValueError):
        HookBusConfig(max_dead_letters=0)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("HOOKBUS_DEBUG_HOOKS", "true")
    monkeypatch.setenv("HOOKBUS_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOOKBUS_LOG_JSON", "1")
    monkeypatch.setenv("HOOKBUS_ID_BASE", "500")
    monkeypatch.setenv("HOOKBUS_MAX_DEAD_LETTERS", "10")
    cfg = HookBusConfig.from_env()
    assert cfg.debug_hooks is True
    assert cfg.log_level == "DEBUG"
    assert cfg.json_logs is True
    assert cfg.id_base == 500
    assert cfg.max_dead_letters == 10


def test_config_from_env_ignores_unknown_flag_values(monkeypatch):
    monkeypatch.setenv("HOOKBUS_DEBUG_HOOKS", "yes")
    assert HookBusConfig.from_env().debug_hooks is False


def test_set_debug_hooks():
    config.set_debug_hooks(True)
    assert config.debug.hooks is True
    config.set_debug_hooks(False)
    assert config.debug.hooks is False


def test_bus_from_config():
    config.set_debug_hooks(False)
    bus = HookBus.from_config(HookBusConfig(debug_hooks=True, id_base=10), isolate_errors=True)
    assert config.debug.hooks is False
    assert isinstance(bus.invoker, IsolatingInvoker)
    assert bus.on("roll", lambda *args: None) == 10
    bus.call("roll")
    assert bus.all_unique_hooks() == ["roll"]


def test_debug_flags_default_off():
    assert DebugFlags().hooks is False


def test_configure_from_config_writes_log_file(tmp_path):
    configure_from_config(HookBusConfig(log_level="INFO", json_logs=True), log_dir=tmp_path / "logs")
    get_logger("hookbus.test").info("config_test_event", value=1)
    log_file = tmp_path / "logs" / "hookbus.log"
    assert log_file.exists()
    assert "config_test_event" in log_file.read_text()


def test_bus_from_config_leaves_process_switch_alone():
    config.set_debug_hooks(True)
    bus = HookBus.from_config(HookBusConfig(debug_hooks=False))
    assert config.debug.hooks is True
    bus.call("roll")
    assert bus.all_unique_hooks() == []
    assert bus.get_stats()["debug_hooks"] is False


def test_reconfigure_closes_previous_log_file(tmp_path):
    configure_logging(level="INFO", log_file=tmp_path / "first.log", colors=False)
    first = logging_config._log_stream
    assert first is not None and not first.closed

    configure_logging(level="INFO", log_file=tmp_path / "second.log", colors=False)
    assert first.closed
    second = logging_config._log_stream
    assert second is not first and not second.closed

    configure_logging(level="INFO", colors=False)
    assert second.closed
    assert logging_config._log_stream is None
