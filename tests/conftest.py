"""Pytest configuration and shared fixtures."""
import pytest

from hookbus.config import DebugFlags
from hookbus.events import HookBus, uninstall
from hookbus.logging_config import configure_logging


def pytest_configure(config):
    """Configure pytest markers and logging."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    configure_logging(level="DEBUG", colors=False)


@pytest.fixture
def bus():
    """Fresh bus with hook debugging off."""
    return HookBus(debug=DebugFlags(hooks=False))


@pytest.fixture
def debug_bus():
    """Fresh bus with hook debugging on."""
    return HookBus(debug=DebugFlags(hooks=True))


@pytest.fixture
def global_bus():
    """Start and finish the test with no process-wide bus installed."""
    uninstall()
    yield
    uninstall()
