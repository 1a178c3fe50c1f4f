"""
Tests for environment-driven configuration.

Run with:
    python -m pytest tests/test_config.py -v
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import config as config_module
from core.config import Config, PollingConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GEMINI_API_KEY",
        "API_KEY",
        "GOOGLE_API_KEY",
        "VEO_POLL_INTERVAL_SECONDS",
        "VEO_PROGRESS_INTERVAL_SECONDS",
        "VEO_POLL_TIMEOUT_SECONDS",
        "VEO_CREDENTIAL_ERROR_SIGNATURES",
        "VEO_EXTENSION_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    config_module.reload_config()


class TestConfig:

    def test_defaults(self):
        """Test default values when no environment overrides are set."""
        config = Config.from_env()

        assert config.polling.poll_interval == 10.0
        assert config.polling.progress_interval == 5.0
        assert config.polling.timeout == 1200.0
        assert config.errors.credential_error_signatures == ["Requested entity was not found."]
        assert config.models.default_model == "veo-3.1-fast-generate-preview"
        assert config.models.extension_model == "veo-3.1-generate-preview"

    def test_api_key_fallbacks(self, monkeypatch):
        """Test that GEMINI_API_KEY takes precedence over the legacy names."""
        monkeypatch.setenv("API_KEY", "legacy")
        assert Config.from_env().api.gemini_api_key == "legacy"

        monkeypatch.setenv("GEMINI_API_KEY", "preferred")
        assert Config.from_env().api.gemini_api_key == "preferred"

    def test_polling_overrides(self, monkeypatch):
        """Test that polling settings are read from the environment."""
        monkeypatch.setenv("VEO_POLL_INTERVAL_SECONDS", "2.5")
        monkeypatch.setenv("VEO_PROGRESS_INTERVAL_SECONDS", "1")
        monkeypatch.setenv("VEO_POLL_TIMEOUT_SECONDS", "0")

        polling = Config.from_env().polling

        assert polling.poll_interval == 2.5
        assert polling.progress_interval == 1.0
        assert polling.timeout_or_none is None

    def test_signature_list(self, monkeypatch):
        """Test that the signature list is split on pipes and trimmed."""
        monkeypatch.setenv("VEO_CREDENTIAL_ERROR_SIGNATURES", "API_KEY_INVALID | Requested entity was not found.|")

        assert Config.from_env().errors.credential_error_signatures == [
            "API_KEY_INVALID",
            "Requested entity was not found.",
        ]

    def test_validate_reports_issues(self):
        """Test that validate reports a missing key and bad polling values."""
        config = Config.from_env()
        config.polling = PollingConfig(poll_interval=0, progress_interval=5, timeout=-1)

        issues = config.validate()

        assert "GEMINI_API_KEY not configured" in issues
        assert any("VEO_POLL_INTERVAL_SECONDS" in issue for issue in issues)
        assert any("VEO_POLL_TIMEOUT_SECONDS" in issue for issue in issues)

    def test_validate_ok(self, monkeypatch):
        """Test that a complete config validates cleanly."""
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        assert Config.from_env().validate() == []

    def test_get_config_is_cached_until_reload(self, monkeypatch):
        """Test that get_config caches until reload_config is called."""
        config_module.reload_config()
        first = config_module.get_config()
        assert config_module.get_config() is first

        config_module.reload_config()
        assert config_module.get_config() is not first
