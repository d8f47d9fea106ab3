"""Tests for settings loading and validation."""

import pytest

from contentdesk.core.exceptions import ConfigurationError
from contentdesk.entrypoints.api.deps import DEV_JWT_REFRESH_SECRET, DEV_JWT_SECRET, Settings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "APP_ENV",
        "JWT_SECRET",
        "JWT_REFRESH_SECRET",
        "JWT_EXPIRE",
        "JWT_REFRESH_EXPIRE",
        "CORS_ORIGINS",
        "LOG_JSON",
        "RATE_LIMIT_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = Settings()

        assert settings.app_env == "development"
        assert settings.jwt_secret == DEV_JWT_SECRET
        assert settings.jwt_refresh_secret == DEV_JWT_REFRESH_SECRET
        assert settings.jwt_expire == "7d"
        assert settings.jwt_refresh_expire == "30d"
        assert settings.log_json is False
        assert settings.rate_limit_enabled is True

    def test_token_config(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("JWT_SECRET", "access")  # pragma: allowlist secret
        clean_env.setenv("JWT_REFRESH_SECRET", "refresh")  # pragma: allowlist secret
        clean_env.setenv("JWT_EXPIRE", "15m")

        config = Settings().token_config

        assert config.access_secret == "access"  # pragma: allowlist secret
        assert config.refresh_secret == "refresh"  # pragma: allowlist secret
        assert config.access_expire == "15m"

    def test_cors_origins_split(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com,")
        assert Settings().cors_origins == ["https://a.example.com", "https://b.example.com"]

    def test_empty_secret_counts_as_unset(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("JWT_SECRET", "")
        assert Settings().jwt_secret == DEV_JWT_SECRET

    @pytest.mark.parametrize("flag", ["false", "0", "no"])
    def test_rate_limit_flag(self, clean_env: pytest.MonkeyPatch, flag: str) -> None:
        clean_env.setenv("RATE_LIMIT_ENABLED", flag)
        assert Settings().rate_limit_enabled is False


class TestValidate:
    def test_development_tolerates_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        Settings().validate()

    def test_production_refuses_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("APP_ENV", "production")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings().validate()

        message = str(exc_info.value)
        assert "JWT_SECRET is unset" in message
        assert "JWT_REFRESH_SECRET is unset" in message

    def test_production_refuses_shared_secret(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("APP_ENV", "production")
        clean_env.setenv("JWT_SECRET", "same")  # pragma: allowlist secret
        clean_env.setenv("JWT_REFRESH_SECRET", "same")  # pragma: allowlist secret

        with pytest.raises(ConfigurationError, match="must differ"):
            Settings().validate()

    def test_production_with_distinct_secrets(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("APP_ENV", "production")
        clean_env.setenv("JWT_SECRET", "access-secret")  # pragma: allowlist secret
        clean_env.setenv("JWT_REFRESH_SECRET", "refresh-secret")  # pragma: allowlist secret

        Settings().validate()
