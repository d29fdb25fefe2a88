"""Configuration module for the Tienda API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (local Cosmos DB emulator)
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

The database connection string and port override are loaded from the
environment (.env file supported).
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

DEFAULT_PORT = 3000


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable."""
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


def _resolve_port(yaml_port: Optional[int]) -> int:
    """PORT from the environment wins over the YAML value."""
    raw_port = _get_optional_env("PORT")
    if not raw_port:
        return int(yaml_port) if yaml_port is not None else DEFAULT_PORT

    try:
        return int(raw_port)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable 'PORT' must be an integer, got '{raw_port}'."
        )


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int


@dataclass(frozen=True)
class CosmosDBConfig:
    """Cosmos DB configuration."""
    connection_string: str
    database_name: str
    products_container: str
    users_container: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    server: ServerConfig
    cosmosdb: CosmosDBConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and from the
    environment for the connection string and port.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    server_section = yaml_config.get("server", {})
    server_config = ServerConfig(
        host=server_section.get("host", "0.0.0.0"),
        port=_resolve_port(server_section.get("port")),
    )

    cosmos_section = yaml_config.get("cosmosdb", {})
    cosmosdb_config = CosmosDBConfig(
        connection_string=_get_required_env("DB"),
        database_name=cosmos_section.get("database_name", "tienda"),
        products_container=cosmos_section.get("products_container", "productos"),
        users_container=cosmos_section.get("users_container", "usuarios"),
    )

    logging_section = yaml_config.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    return AppConfig(
        server=server_config,
        cosmosdb=cosmosdb_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
