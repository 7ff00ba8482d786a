"""
Configuration Management.

Loads the connection string from the environment (or config/.env) and
settings from config/settings/*.yaml.

Secrets (.env / environment):
    DSN - database connection string

Settings (YAML):
    application.yaml - App identity, server, cors, static files
    database.yaml    - Driver and pool settings
    logging.yaml     - Logging configuration
    features.yaml    - Feature flags
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from guestbook.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
)

# URL schemes accepted in DSN and rewritten to the configured async driver
_PLAIN_POSTGRES_SCHEMES = ("postgres://", "postgresql://")


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Connection string loaded from the environment or config/.env."""

    dsn: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def normalize_database_url(dsn: str, driver: str) -> str:
    """
    Rewrite a plain PostgreSQL URL to use the configured async driver.

    URLs that already name a driver (``postgresql+asyncpg://``,
    ``sqlite+aiosqlite://``) are returned unchanged.

    Args:
        dsn: Connection string as given in the environment.
        driver: SQLAlchemy driver name from database.yaml.

    Returns:
        SQLAlchemy URL string.
    """
    for scheme in _PLAIN_POSTGRES_SCHEMES:
        if dsn.startswith(scheme):
            return f"{driver}://{dsn[len(scheme):]}"
    return dsn


def get_database_url() -> str:
    """
    Construct the database URL from DSN and database.yaml.

    Returns:
        Database connection URL string.
    """
    driver = get_app_config().database.driver
    return normalize_database_url(get_settings().dsn, driver)


def get_server_address() -> tuple[str, int]:
    """
    Get the host and port the server listens on, from application.yaml.

    Returns:
        Tuple of (host, port).
    """
    server = get_app_config().application.server
    return server.host, server.port
