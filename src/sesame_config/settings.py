"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. SESAME_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker
5. .env in the working directory

Uses pydantic-settings for automatic type coercion and validation.
The short variable names used by existing deployments (DB, DBNAME, COLLECTION,
KEY) are accepted as aliases.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    Field,
    SecretStr,
    ValidationError,
    computed_field,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from sesame_auth.exceptions import ConfigError
from sesame_auth.schemas import RefreshPolicy


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. SESAME_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    4. ./.env
    """
    env_file_path = os.environ.get("SESAME_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    local_env = Path.cwd() / ".env"
    if local_env.exists():
        return local_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Security (MUST be set - app fails without these)
    jwt_secret_key: SecretStr = Field(
        validation_alias=AliasChoices("jwt_secret_key", "JWT_SECRET_KEY", "KEY"),
    )
    store_uri: SecretStr = Field(
        validation_alias=AliasChoices("store_uri", "STORE_URI", "DB"),
    )

    # Application
    app_name: str = "Sesame"
    debug: bool = False

    # Store
    store_database: str | None = Field(
        default=None,
        validation_alias=AliasChoices("store_database", "STORE_DATABASE", "DBNAME"),
    )
    store_collection: str = Field(
        default="accounts",
        validation_alias=AliasChoices(
            "store_collection",
            "STORE_COLLECTION",
            "COLLECTION",
        ),
    )
    store_timeout_seconds: float = 5.0
    store_connect_timeout_seconds: float = 10.0

    # JWT
    jwt_token_expire_hours: int = 24
    jwt_leeway_seconds: int = 0

    # Passwords
    password_hash_rounds: int = 14

    # Session policies
    refresh_policy: RefreshPolicy = RefreshPolicy.STATELESS
    uniform_auth_errors: bool = False

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed (secure default)

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("jwt_secret_key", "store_uri")
    @classmethod
    def _require_non_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    @property
    def database_url(self) -> str:
        """The store URI with the configured database name applied."""
        url = make_url(self.store_uri.get_secret_value())
        if self.store_database:
            url = url.set(database=self.store_database)
        return url.render_as_string(hide_password=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


def load_settings(**overrides: Any) -> Settings:
    """Build settings, turning missing or invalid values into ConfigError.

    Raises
    ------
    ConfigError
        If a required secret (signing key, store URI) is absent or blank
    """
    try:
        return Settings(**overrides)  # type: ignore[call-arg]  # loads from env
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        msg = f"Invalid configuration ({problems})"
        raise ConfigError(msg) from e


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Required fields (jwt_secret_key, store_uri) must be provided via
    environment variables or .env file.
    """
    return load_settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
