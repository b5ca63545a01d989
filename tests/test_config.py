"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("COLOR_TOOLS_HOST", "COLOR_TOOLS_PORT", "COLOR_TOOLS_LOG_LEVEL", "COLOR_TOOLS_MCP"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.host == "0.0.0.0"
        assert settings.port == 8973
        assert settings.log_level == "INFO"
        assert settings.mcp is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COLOR_TOOLS_HOST", "127.0.0.1")
        monkeypatch.setenv("COLOR_TOOLS_PORT", "9000")
        monkeypatch.setenv("COLOR_TOOLS_LOG_LEVEL", "debug")
        monkeypatch.setenv("COLOR_TOOLS_MCP", "no")
        settings = Settings.from_env()
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"
        assert settings.mcp is False

    def test_rejects_bad_port(self, monkeypatch):
        monkeypatch.setenv("COLOR_TOOLS_PORT", "70000")
        with pytest.raises(ValidationError):
            Settings.from_env()
