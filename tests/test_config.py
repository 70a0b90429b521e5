"""
Unit tests for configuration module.
"""
from pathlib import Path

import pytest

from core.config import get_settings, reset_settings
from core.exceptions import ConfigurationError


def test_settings_defaults(monkeypatch):
    """Test default configuration values."""
    for name in ["APP_NAME", "PORT", "LOG_LEVEL", "DATA_SOURCE", "FETCH_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)
    reset_settings()

    settings = get_settings()
    assert settings.app_name == "Budget Dashboard"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.data_source == "data/haushalt.json"
    assert settings.fetch_timeout == 30


def test_settings_from_environment(monkeypatch):
    """Test environment variables override defaults."""
    monkeypatch.setenv("DATA_SOURCE", "https://example.org/haushalt.json")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    reset_settings()

    settings = get_settings()
    assert settings.data_source == "https://example.org/haushalt.json"
    assert settings.log_level == "DEBUG"


def test_settings_creates_storage_directory(tmp_path):
    """Test export storage directory is created."""
    settings = get_settings()
    assert Path(settings.temp_storage_path) == tmp_path / "files"
    assert Path(settings.temp_storage_path).is_dir()


def test_settings_validation_port(monkeypatch):
    """Test port validation."""
    monkeypatch.setenv("PORT", "99999")
    reset_settings()

    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()
    assert any("port" in err.lower() for err in exc_info.value.details["errors"])


def test_settings_validation_log_level(monkeypatch):
    """Test log level validation."""
    monkeypatch.setenv("LOG_LEVEL", "INVALID")
    reset_settings()

    with pytest.raises(ConfigurationError):
        get_settings()


def test_settings_validation_fetch_timeout(monkeypatch):
    monkeypatch.setenv("FETCH_TIMEOUT", "0")
    reset_settings()

    with pytest.raises(ConfigurationError):
        get_settings()


def test_settings_singleton():
    """Test settings singleton behavior."""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2
