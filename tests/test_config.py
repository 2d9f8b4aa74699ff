"""Tests for settings loading."""

from podcast_catalog.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database.url == "sqlite:///./podcasts.db"
        assert settings.server.port == 8000
        assert settings.debug is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/other.db")
        monkeypatch.setenv("SERVER_PORT", "9001")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.database.url == "sqlite:///tmp/other.db"
        assert settings.server.port == 9001
        assert settings.log_level == "DEBUG"
