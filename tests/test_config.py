"""Tests for configuration management."""


import pytest
from pydantic import ValidationError

from ddg_web_search.config import Settings, get_settings, reload_settings


class TestSettings:
    """Test the Settings class."""

    def test_default_settings(self, monkeypatch):
        """Test that default settings are created correctly."""
        for name in ("DDG_HEADLESS", "DDG_MCP_PORT", "DDG_LOG_LEVEL", "DDG_MCP_TRANSPORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.headless is True
        assert settings.search_rate_limit == 1
        assert settings.search_rate_interval_ms == 2000
        assert settings.fetch_rate_limit == 1
        assert settings.fetch_rate_interval_ms == 1000
        assert settings.http_timeout == 10.0
        assert settings.mcp_transport == "stdio"
        assert settings.mcp_host == "localhost"
        assert settings.mcp_port == 3001
        assert settings.max_content_length == 10000

    def test_environment_prefix(self, monkeypatch):
        """Test that DDG_-prefixed variables are read."""
        monkeypatch.setenv("DDG_MCP_PORT", "8080")
        monkeypatch.setenv("DDG_HEADLESS", "false")
        monkeypatch.setenv("ddg_mcp_transport", "http")

        settings = Settings(_env_file=None)

        assert settings.mcp_port == 8080
        assert settings.headless is False
        assert settings.mcp_transport == "http"

    def test_path_expansion(self, tmp_path, monkeypatch):
        """Test that the log file path is made absolute."""
        monkeypatch.chdir(tmp_path)

        settings = Settings(_env_file=None, log_file="logs/ddg.log")

        assert settings.log_file.is_absolute()
        assert settings.log_file == (tmp_path / "logs" / "ddg.log").resolve()

    def test_empty_log_file_is_none(self):
        """Test that an empty log file setting disables file logging."""
        settings = Settings(_env_file=None, log_file="")
        assert settings.log_file is None

    def test_validation_errors(self):
        """Test that invalid settings raise validation errors."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="INVALID")

        with pytest.raises(ValidationError):
            Settings(_env_file=None, mcp_transport="websocket")

        with pytest.raises(ValidationError):
            Settings(_env_file=None, mcp_port=70000)

        with pytest.raises(ValidationError):
            Settings(_env_file=None, search_rate_limit=0)

        with pytest.raises(ValidationError):
            Settings(_env_file=None, http_timeout=0.5)

    def test_model_dump_safe(self):
        """Test the display dump of settings."""
        settings = Settings(_env_file=None, mcp_host="0.0.0.0", mcp_port=3000)
        safe_dump = settings.model_dump_safe()

        assert safe_dump["mcp_address"] == "0.0.0.0:3000"
        assert safe_dump["search_rate"] == "1/2000ms"
        assert safe_dump["log_file"] == "-"
        assert all(isinstance(value, str) for value in safe_dump.values())


class TestGlobalSettings:
    """Test global settings functions."""

    def test_get_settings_singleton(self):
        """Test that get_settings returns the same instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_reload_settings(self, monkeypatch):
        """Test that reload_settings picks up environment changes."""
        first = get_settings()
        monkeypatch.setenv("DDG_MCP_PORT", "4000")

        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.mcp_port == 4000
        assert get_settings() is reloaded
