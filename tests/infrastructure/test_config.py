"""Tests for environment-driven settings."""

from pathlib import Path

from storefront.infrastructure.config import load_settings


class TestLoadSettings:

    def test_defaults(self, monkeypatch):
        for name in ("STOREFRONT_DATA_DIR", "STOREFRONT_LOG_LEVEL", "STOREFRONT_LOG_JSON", "STOREFRONT_CURRENCY"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.data_dir == Path("data")
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.currency == "INR"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_DATA_DIR", "/srv/store")
        monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "debug")
        monkeypatch.setenv("STOREFRONT_LOG_JSON", "true")
        monkeypatch.setenv("STOREFRONT_CURRENCY", "usd")

        settings = load_settings()

        assert settings.data_dir == Path("/srv/store")
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.currency == "USD"

    def test_arguments_win(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_DATA_DIR", "/srv/store")
        settings = load_settings(data_dir="/tmp/other", log_level="warning")
        assert settings.data_dir == Path("/tmp/other")
        assert settings.log_level == "WARNING"
