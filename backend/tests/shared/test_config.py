"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Folio API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.app_version == "0.1.0"
        assert settings.auth_log_backend == "memory"
        assert settings.auth_log_max_entries == 500
        assert settings.rate_limit_fail_open is True

    def test_rate_limit_defaults(self):
        """Default budgets match the public endpoints."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert (settings.rate_limit_chat_requests, settings.rate_limit_chat_window) == (10, 60)
        assert (settings.rate_limit_auth_track_requests, settings.rate_limit_auth_track_window) == (30, 60)
        assert (settings.rate_limit_contact_requests, settings.rate_limit_contact_window) == (3, 3600)

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "AUTH_LOG_BACKEND": "database"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.auth_log_backend == "database"

    def test_rejects_unknown_backend(self):
        """AUTH_LOG_BACKEND only accepts memory or database."""
        with patch.dict(os.environ, {"AUTH_LOG_BACKEND": "redis"}):
            with pytest.raises(ValidationError):
                Settings()

    def test_loads_cors_origins_as_json(self):
        """List settings are read as JSON."""
        with patch.dict(os.environ, {"CORS_ORIGINS": '["https://me.dev", "https://www.me.dev"]'}):
            settings = Settings()
            assert settings.cors_origins == ["https://me.dev", "https://www.me.dev"]

    def test_loads_secrets_from_env(self):
        """Provider and identity secrets come from the environment."""
        with patch.dict(os.environ, {
            "GROQ_API_KEY": "gsk-test",
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings()
            assert settings.groq_api_key == "gsk-test"
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
