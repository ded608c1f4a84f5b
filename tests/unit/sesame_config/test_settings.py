"""Unit tests for settings loading."""

import pytest

from sesame_auth import ConfigError, RefreshPolicy
from sesame_config import Settings, get_settings, load_settings

ENV_NAMES = (
    "JWT_SECRET_KEY",
    "KEY",
    "STORE_URI",
    "DB",
    "STORE_DATABASE",
    "DBNAME",
    "STORE_COLLECTION",
    "COLLECTION",
    "REFRESH_POLICY",
    "UNIFORM_AUTH_ERRORS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every sesame variable from the process environment."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestRequiredSecrets:
    """Tests for the required signing secret and store URI."""

    def test_missing_secret_raises_config_error(self, clean_env):
        clean_env.setenv("STORE_URI", "sqlite+aiosqlite:///:memory:")

        with pytest.raises(ConfigError, match="jwt_secret_key"):
            load_settings(_env_file=None)

    def test_missing_store_uri_raises_config_error(self, clean_env):
        clean_env.setenv("JWT_SECRET_KEY", "secret")

        with pytest.raises(ConfigError, match="store_uri"):
            load_settings(_env_file=None)

    def test_blank_secret_raises_config_error(self, clean_env):
        clean_env.setenv("JWT_SECRET_KEY", "   ")
        clean_env.setenv("STORE_URI", "sqlite+aiosqlite:///:memory:")

        with pytest.raises(ConfigError):
            load_settings(_env_file=None)

    def test_get_settings_raises_config_error(self, clean_env):
        with pytest.raises(ConfigError):
            get_settings()

    def test_secrets_are_masked(self, clean_env):
        settings = load_settings(
            _env_file=None,
            jwt_secret_key="top-secret",
            store_uri="sqlite+aiosqlite:///:memory:",
        )

        assert "top-secret" not in repr(settings)
        assert settings.jwt_secret_key.get_secret_value() == "top-secret"


class TestEnvironmentAliases:
    """Tests for the short variable names accepted as aliases."""

    def test_short_names_are_accepted(self, clean_env):
        clean_env.setenv("KEY", "k")
        clean_env.setenv("DB", "postgresql+asyncpg://u:p@db:5432/postgres")
        clean_env.setenv("DBNAME", "sesame")
        clean_env.setenv("COLLECTION", "users")

        settings = load_settings(_env_file=None)

        assert settings.jwt_secret_key.get_secret_value() == "k"
        assert settings.store_database == "sesame"
        assert settings.store_collection == "users"

    def test_long_names_are_accepted(self, clean_env):
        clean_env.setenv("JWT_SECRET_KEY", "k")
        clean_env.setenv("STORE_URI", "sqlite+aiosqlite:///./sesame.db")
        clean_env.setenv("STORE_COLLECTION", "members")
        clean_env.setenv("REFRESH_POLICY", "verify_subject")
        clean_env.setenv("UNIFORM_AUTH_ERRORS", "true")

        settings = load_settings(_env_file=None)

        assert settings.store_collection == "members"
        assert settings.refresh_policy is RefreshPolicy.VERIFY_SUBJECT
        assert settings.uniform_auth_errors is True


class TestDefaults:
    """Tests for default values."""

    def setup_method(self):
        """Set up test fixtures."""
        self.settings = Settings(
            _env_file=None,
            jwt_secret_key="k",
            store_uri="sqlite+aiosqlite:///:memory:",
        )

    def test_store_defaults(self):
        assert self.settings.store_collection == "accounts"
        assert self.settings.store_timeout_seconds == 5.0
        assert self.settings.store_connect_timeout_seconds == 10.0

    def test_token_and_password_defaults(self):
        assert self.settings.jwt_token_expire_hours == 24
        assert self.settings.password_hash_rounds == 14

    def test_policy_defaults(self):
        assert self.settings.refresh_policy is RefreshPolicy.STATELESS
        assert self.settings.uniform_auth_errors is False

    def test_cors_origins_empty_by_default(self):
        assert self.settings.cors_origins == []


class TestDatabaseUrl:
    """Tests for combining the store URI with the database name."""

    def test_database_name_overrides_uri(self):
        settings = Settings(
            _env_file=None,
            jwt_secret_key="k",
            store_uri="postgresql+asyncpg://user:pw@db:5432/postgres",
            store_database="sesame",
        )

        assert settings.database_url == "postgresql+asyncpg://user:pw@db:5432/sesame"

    def test_uri_used_unchanged_without_database_name(self):
        settings = Settings(
            _env_file=None,
            jwt_secret_key="k",
            store_uri="sqlite+aiosqlite:///./sesame.db",
        )

        assert settings.database_url == "sqlite+aiosqlite:///./sesame.db"

    def test_cors_origins_parsed_from_comma_list(self):
        settings = Settings(
            _env_file=None,
            jwt_secret_key="k",
            store_uri="sqlite+aiosqlite:///:memory:",
            api_cors_origins="http://a.test, http://b.test",
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]
