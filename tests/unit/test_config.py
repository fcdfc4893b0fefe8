"""
Unit tests for household_sync/config.py

Tests Settings defaults, environment variable loading, production
validation and configuration caching.
"""

import pytest

from household_sync.config import OAuthClientConfig, Settings, get_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in (
        "PYTHON_ENV",
        "LOG_LEVEL",
        "DATABASE_URL",
        "GOOGLE_CALENDAR_ID",
        "GOOGLE_OAUTH_CLIENT_ID",
        "GOOGLE_OAUTH_CLIENT_SECRET",
        "GOOGLE_OAUTH_REDIRECT_URI",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    """Test Settings initialization with default values."""

    def test_settings_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.python_env == "development"
        assert settings.log_level == "INFO"
        assert settings.database_url == "sqlite:///./household_sync.db"
        assert settings.google_calendar_id == "primary"
        assert settings.api_port == 8000
        assert settings.is_development is True
        assert settings.uses_google_oauth is False

    def test_oauth_config(self):
        settings = Settings(
            _env_file=None,
            google_oauth_client_id="id",
            google_oauth_client_secret="secret",
            google_oauth_redirect_uri="https://app.example.com/callback",
        )

        assert settings.oauth_config == OAuthClientConfig(
            client_id="id",
            client_secret="secret",
            redirect_uri="https://app.example.com/callback",
        )
        assert settings.oauth_config.is_configured is True


class TestSettingsEnvironmentVariables:
    """Test Settings loading from environment variables."""

    def test_settings_from_env_vars(self, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("GOOGLE_OAUTH_CLIENT_ID", "env-id")

        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.log_level == "DEBUG"
        assert settings.google_oauth_client_id == "env-id"


class TestProductionValidation:
    """Test validate_production_config."""

    def test_development_skips_validation(self):
        Settings(_env_file=None).validate_production_config()

    def test_production_requires_postgres_and_oauth(self):
        settings = Settings(_env_file=None, python_env="production")

        with pytest.raises(ValueError) as exc_info:
            settings.validate_production_config()

        message = str(exc_info.value)
        assert "PostgreSQL" in message
        assert "GOOGLE_OAUTH_CLIENT_ID" in message

    def test_valid_production_config(self):
        settings = Settings(
            _env_file=None,
            python_env="production",
            database_url="postgresql://user:pass@db/household",
            google_oauth_client_id="id",
            google_oauth_client_secret="secret",
        )

        settings.validate_production_config()
        assert settings.uses_postgresql is True


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
