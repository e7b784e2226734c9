"""Tests for settings loading."""

import pytest

from hotspot_engine import EngineSettings, get_settings, set_settings
from hotspot_engine.config import DEFAULT_MODEL, DEFAULT_TIMEOUT


class TestEngineSettings:
    """Tests for EngineSettings."""

    @pytest.mark.parametrize("api_key,expected", [
        (None, False),
        ("", False),
        ("   ", False),
        ("your-openai-api-key-here", False),
        ("sk-real", True),
    ])
    def test_has_credential(self, api_key, expected):
        assert EngineSettings(api_key=api_key).has_credential is expected

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("HOTSPOT_MODEL", "gpt-env")
        monkeypatch.setenv("HOTSPOT_INFERENCE_TIMEOUT", "3.5")
        monkeypatch.setenv("HOTSPOT_LOG_LEVEL", "debug")
        settings = EngineSettings.from_env()
        assert settings.api_key == "sk-env"
        assert settings.model == "gpt-env"
        assert settings.timeout == 3.5
        assert settings.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "HOTSPOT_MODEL", "HOTSPOT_INFERENCE_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        settings = EngineSettings.from_env()
        assert settings.api_key is None
        assert settings.base_url is None
        assert settings.model == DEFAULT_MODEL
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_invalid_number_falls_back_to_default(self, monkeypatch, caplog):
        monkeypatch.setenv("HOTSPOT_INFERENCE_TIMEOUT", "soon")
        monkeypatch.setenv("HOTSPOT_MAX_TOKENS", "lots")
        settings = EngineSettings.from_env()
        assert settings.timeout == DEFAULT_TIMEOUT
        assert "HOTSPOT_INFERENCE_TIMEOUT" in caplog.text

    def test_get_settings_is_cached(self, monkeypatch):
        set_settings(None)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-first")
        first = get_settings()
        monkeypatch.setenv("OPENAI_API_KEY", "sk-second")
        assert get_settings() is first
        assert first.api_key == "sk-first"
