import pytest

from logbridge.config import get_settings
from logbridge.dispatcher import dispatcher


@pytest.fixture(autouse=True)
def reset_logbridge():
    """
    Restores the process-wide dispatcher and settings cache around each test.
    Default selection runs again on the first log call of every test.
    """
    dispatcher.reset()
    get_settings.cache_clear()
    yield
    dispatcher.reset()
    get_settings.cache_clear()


@pytest.fixture
def no_backends(monkeypatch):
    """Environment in which neither structlog nor Cloud Logging is offered."""
    monkeypatch.setenv("LOGBRIDGE_STRUCTLOG_ENABLED", "false")
    monkeypatch.setenv("LOGBRIDGE_PLATFORM_LOGGING", "off")
    get_settings.cache_clear()
