from __future__ import annotations

import pytest
from django.conf import settings

from modules.core.conf import AppConfig

pytestmark = pytest.mark.unit


class TestAppConfig:
    def test_from_env_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "s3")
        monkeypatch.setenv("API_KEY", "k1")
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/shop")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("ALLOWED_HOSTS", "api.example.com, localhost")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = AppConfig.from_env()

        assert config.secret_key == "s3"
        assert config.api_key == "k1"
        assert config.database_url == "postgres://u:p@db:5432/shop"
        assert config.debug is True
        assert config.allowed_hosts == ("api.example.com", "localhost")
        assert config.log_level == "DEBUG"

    def test_database_url_default(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "s3")
        monkeypatch.delenv("DATABASE_URL", raising=False)

        config = AppConfig.from_env(default_database_url="sqlite:///tmp.db")
        assert config.database_url == "sqlite:///tmp.db"

    def test_api_key_configured(self):
        assert AppConfig(secret_key="x", api_key="k").api_key_configured is True
        assert AppConfig(secret_key="x").api_key_configured is False

    def test_is_immutable(self):
        config = AppConfig(secret_key="x")
        with pytest.raises(AttributeError):
            config.api_key = "changed"

    def test_settings_expose_config(self):
        assert isinstance(settings.APP_CONFIG, AppConfig)
        assert settings.SECRET_KEY == settings.APP_CONFIG.secret_key
