"""Shared fixtures for the AID test suite."""

import pytest
from unittest.mock import MagicMock, patch

from aid.storage import DebouncedSaver, DraftStore


class ManualTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


@pytest.fixture
def mock_config():
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "model": "gemini-test",
        "temperature": 0,
        "request_timeout_seconds": 5,
        "llm_max_retries": 2,
        "retry_min_wait_seconds": 0,
        "retry_wait_multiplier": 0,
        "api_key_env": "GOOGLE_API_KEY",
        "storage_path": "./.aid/drafts.json",
        "autosave_interval_seconds": 1.0,
        "default_language": "python",
        "default_output_position": "bottom",
        "default_editor_share": 60,
        "panel_height_px": 720,
        "run_workers": 4,
        "default_dark_mode": True,
    }
    with patch("aid.config._config", test_config):
        yield test_config


@pytest.fixture
def api_key(monkeypatch, mock_config):
    """Configure a fake Gemini API key."""
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch, mock_config):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)


@pytest.fixture
def store(tmp_path):
    return DraftStore(tmp_path / "drafts.json")


@pytest.fixture
def timers():
    """Every ManualTimer created through ``timer_factory``, in creation order."""
    return []


@pytest.fixture
def timer_factory(timers):
    def _factory(interval, function):
        timer = ManualTimer(interval, function)
        timers.append(timer)
        return timer

    return _factory


@pytest.fixture
def saver(store, timer_factory):
    return DebouncedSaver(store, interval=1.0, timer_factory=timer_factory)


@pytest.fixture
def mock_llm():
    """A chat model whose ``invoke`` the test configures."""
    return MagicMock()
