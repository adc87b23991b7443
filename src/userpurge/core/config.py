"""Configuration utilities for user store access."""

import os
import tempfile

import dotenv

from ..models.config import AppConfig, UserStoreConfig
from .exceptions import ConfigError

# Global constants for API configuration
API_RATE_LIMIT = 0.5  # seconds between requests
API_TIMEOUT = 30  # request timeout in seconds

VALID_ENVIRONMENTS = ("dev", "prod")


def check_env_file() -> None:
    """Check if .env file exists and load it."""
    env_path = ".env"
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path)


def get_store_config(env: str = "dev") -> UserStoreConfig:
    """Get user store configuration from environment variables.

    Args:
        env: Environment to get config for ('dev' or 'prod')

    Returns:
        UserStoreConfig: Store configuration

    Raises:
        ConfigError: If required environment variables are missing or invalid
    """
    if env not in VALID_ENVIRONMENTS:
        raise ConfigError(f"Unknown environment: {env}")

    check_env_file()

    env_vars = {key: value.strip() for key, value in os.environ.items()}
    try:
        config = UserStoreConfig.from_env_vars(env_vars, env)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    if not config.validate():
        raise ConfigError(
            f"Invalid user store URL: {config.base_url}. "
            "URL should start with https:// or http://"
        )

    return config


def get_upload_dir() -> str:
    """Get the directory uploaded CSV files are staged in.

    Returns:
        str: ``USERPURGE_UPLOAD_DIR`` if set, otherwise the system temp dir
    """
    check_env_file()
    return os.getenv("USERPURGE_UPLOAD_DIR") or tempfile.gettempdir()


def get_app_config(env: str = "dev", with_store: bool = True) -> AppConfig:
    """Assemble the application configuration.

    Args:
        env: Environment name ('dev' or 'prod')
        with_store: Whether remote user store settings are required

    Returns:
        AppConfig: Application configuration
    """
    store = get_store_config(env) if with_store else None
    return AppConfig(store=store, upload_dir=get_upload_dir(), debug=env == "dev")
