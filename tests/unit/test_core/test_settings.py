"""Unit tests for modular Pydantic Settings v2."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from terra_client.core.settings import (
    ClientSettings,
    LoggingSettings,
    get_client_settings,
    get_logging_settings,
    get_settings,
)


@pytest.mark.unit
class TestClientSettings:
    """Test suite for ClientSettings."""

    def test_client_settings_defaults(self):
        """Test ClientSettings default values."""
        settings = ClientSettings()

        assert settings.base_url == "http://localhost:8080/api"
        assert settings.refresh_path == "/v1/auth/refresh"
        assert settings.login_route == "/login"
        assert settings.forbidden_route == "/forbidden"
        assert settings.forbidden_aliases == ["/forbidden", "/403"]
        assert settings.session_file is None

    def test_client_settings_frozen(self):
        """Test that ClientSettings instances are frozen (immutable)."""
        settings = ClientSettings()

        with pytest.raises(ValidationError):
            settings.timeout = 5.0

    def test_base_url_trailing_slash_stripped(self):
        """Test base URL normalization."""
        settings = ClientSettings(base_url="https://crm.example.com/api/")
        assert settings.base_url == "https://crm.example.com/api"

    def test_routes_get_leading_slash(self):
        """Test navigation routes are made absolute."""
        settings = ClientSettings(login_route="signin", forbidden_route="denied")
        assert settings.login_route == "/signin"
        assert settings.forbidden_route == "/denied"

    def test_refresh_timeout_must_be_positive(self):
        """Test refresh_timeout validation."""
        with pytest.raises(ValidationError):
            ClientSettings(refresh_timeout=0)

    @pytest.mark.parametrize(
        "url",
        ["/auth/login", "/v1/auth/discover", "/v1/auth/refresh", "/v1/discovery/tenants"],
    )
    def test_tenant_independent_paths(self, url):
        """Test auth and discovery endpoints are tenant independent."""
        assert ClientSettings().is_tenant_independent(url) is True

    def test_tenant_scoped_path(self):
        """Test ordinary resources are tenant scoped."""
        assert ClientSettings().is_tenant_independent("/v1/health/reminders") is False

    def test_user_action_endpoints(self):
        """Test the default user-action allow-list."""
        settings = ClientSettings()
        assert settings.is_user_action("/v1/tenant-admin/bundles") is True
        assert settings.is_user_action("/v1/tenant-admin/users/7/permissions") is True
        assert settings.is_user_action("/v1/health/customers") is False

    def test_credential_calls(self):
        """Test refresh, login and logout are credential calls."""
        settings = ClientSettings()
        assert settings.is_credential_call("/v1/auth/refresh") is True
        assert settings.is_credential_call("/auth/login") is True
        assert settings.is_credential_call("/v1/auth/logout") is True
        assert settings.is_credential_call("/v1/auth/discover") is False

    def test_env_override(self, monkeypatch):
        """Test TERRA_ environment variables are applied."""
        monkeypatch.setenv("TERRA_BASE_URL", "https://env.example.com/api")
        monkeypatch.setenv("TERRA_REFRESH_TIMEOUT", "3.5")

        settings = ClientSettings()

        assert settings.base_url == "https://env.example.com/api"
        assert settings.refresh_timeout == 3.5

    def test_yaml_source_overrides_env(self, monkeypatch, tmp_path):
        """Test conf/client.yaml and client.d files take precedence over env."""
        (tmp_path / "client.yaml").write_text("base_url: https://yaml.example.com/api\ntimeout: 12\n")
        (tmp_path / "client.d").mkdir()
        (tmp_path / "client.d" / "10-timeout.yaml").write_text("timeout: 7\n")
        monkeypatch.setenv("CLIENT_CONFIG_DIR", str(tmp_path))
        monkeypatch.setenv("TERRA_BASE_URL", "https://env.example.com/api")

        settings = ClientSettings()

        assert settings.base_url == "https://yaml.example.com/api"
        assert settings.timeout == 7

    def test_init_kwargs_win(self, monkeypatch):
        """Test explicit kwargs beat every other source."""
        monkeypatch.setenv("TERRA_BASE_URL", "https://env.example.com/api")
        assert ClientSettings(base_url="http://kw/api").base_url == "http://kw/api"


@pytest.mark.unit
class TestLoggingSettings:
    """Test suite for LoggingSettings."""

    def test_level_normalized(self):
        """Test log levels are upper-cased."""
        settings = LoggingSettings(level="debug", console_level="warning")
        assert settings.level == "DEBUG"
        assert settings.effective_console_level == "WARNING"
        assert settings.effective_file_level == "DEBUG"

    def test_file_path_only_when_enabled(self, tmp_path):
        """Test effective_file_path honours file_enabled."""
        path = tmp_path / "client.log"
        assert LoggingSettings(file_path=path).effective_file_path is None
        assert LoggingSettings(file_path=path, file_enabled=True).effective_file_path == path

    def test_json_logs_from_env(self, monkeypatch):
        """Test LOG_JSON_LOGS toggles JSON output."""
        monkeypatch.setenv("LOG_JSON_LOGS", "true")
        assert LoggingSettings().json_logs is True

    def test_to_logging_kwargs(self):
        """Test conversion to configure_logging kwargs."""
        kwargs = LoggingSettings(level="INFO", json_logs=True).to_logging_kwargs()

        assert kwargs["log_level"] == "INFO"
        assert kwargs["json_logs"] is True
        assert kwargs["file_path"] is None
        assert kwargs["service_name"] == "terra-client"


@pytest.mark.unit
class TestSettingsLoaders:
    """Test suite for cached loaders."""

    def test_loaders_are_cached(self):
        """Test loaders return the same instance until caches are cleared."""
        assert get_client_settings() is get_client_settings()
        assert get_logging_settings() is get_logging_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        """Test cache_clear picks up new environment values."""
        first = get_client_settings()
        monkeypatch.setenv("TERRA_TIMEOUT", "9")
        get_client_settings.cache_clear()

        second = get_client_settings()

        assert second is not first
        assert second.timeout == 9

    def test_unified_settings(self):
        """Test unified settings compose both domains."""
        settings = get_settings()
        assert isinstance(settings.client, ClientSettings)
        assert isinstance(settings.logging, LoggingSettings)
