"""
Configuration Tests

Tests for environment-driven settings.
"""

from integrity.config import ENGINE_VERSION, Settings, get_settings, load_settings


class TestLoadSettings:
    """Environment variables override defaults."""

    def test_defaults(self, monkeypatch):
        for name in ("INTEGRITY_LOG_LEVEL", "INTEGRITY_HOST", "INTEGRITY_PORT", "INTEGRITY_CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings == Settings()
        assert settings.version == ENGINE_VERSION

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("INTEGRITY_LOG_LEVEL", "debug")
        monkeypatch.setenv("INTEGRITY_HOST", "127.0.0.1")
        monkeypatch.setenv("INTEGRITY_PORT", "9100")
        monkeypatch.setenv("INTEGRITY_CORS_ORIGINS", "https://a.example, https://b.example")

        settings = load_settings()

        assert settings.log_level == "DEBUG"
        assert settings.host == "127.0.0.1"
        assert settings.port == 9100
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_invalid_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("INTEGRITY_PORT", "not-a-port")

        assert load_settings().port == 8000

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
