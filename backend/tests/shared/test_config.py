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
        assert settings.app_name == "Kastel Ops API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"
        assert settings.storage_backend == "memory"
        assert settings.jwt_audience == "authenticated"
        assert settings.suggestion_default_limit == 100

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "LOG_LEVEL": "debug"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.log_level == "debug"

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "STORAGE_BACKEND": "supabase",
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "SUPABASE_JWT_SECRET": "jwt-secret",
        }):
            settings = Settings()
            assert settings.storage_backend == "supabase"
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.supabase_jwt_secret == "jwt-secret"

    def test_rejects_unknown_storage_backend(self):
        with patch.dict(os.environ, {"STORAGE_BACKEND": "sqlite"}):
            with pytest.raises(ValidationError):
                Settings()


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
