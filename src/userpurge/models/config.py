"""Configuration data models for userpurge."""

import tempfile
from dataclasses import dataclass
from typing import Any


@dataclass
class UserStoreConfig:
    """Configuration for access to a remote user store."""

    base_url: str
    api_token: str
    environment: str

    def __post_init__(self) -> None:
        """Normalize the base URL."""
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env_vars(
        cls, env_vars: dict[str, str], environment: str
    ) -> "UserStoreConfig":
        """Create UserStoreConfig from environment variables.

        Args:
            env_vars: Dictionary of environment variables
            environment: Environment name ('dev' or 'prod')

        Returns:
            UserStoreConfig: Configuration instance

        Raises:
            ValueError: If required environment variables are missing
        """
        prefix = "DEV_" if environment == "dev" else ""

        base_url = env_vars.get(f"{prefix}USERSTORE_URL")
        api_token = env_vars.get(f"{prefix}USERSTORE_TOKEN")

        if not base_url:
            raise ValueError(f"Missing {prefix}USERSTORE_URL environment variable")
        if not api_token:
            raise ValueError(f"Missing {prefix}USERSTORE_TOKEN environment variable")

        return cls(base_url=base_url, api_token=api_token, environment=environment)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary format.

        Returns:
            Dict[str, Any]: Configuration as dictionary
        """
        return {
            "base_url": self.base_url,
            "api_token": "***REDACTED***",
            "environment": self.environment,
        }

    def get_api_url(self, endpoint: str = "") -> str:
        """Get the user store API URL for an endpoint.

        Args:
            endpoint: API endpoint to append (optional)

        Returns:
            str: API URL
        """
        if endpoint:
            return f"{self.base_url}/{endpoint.lstrip('/')}"
        return self.base_url

    def validate(self) -> bool:
        """Validate that all required fields are present and valid.

        Returns:
            bool: True if configuration is valid
        """
        if not self.base_url or not self.api_token:
            return False

        if self.environment not in ["dev", "prod"]:
            return False

        return self.base_url.startswith(("https://", "http://"))


@dataclass
class APIConfig:
    """Configuration for API rate limiting and timeouts."""

    rate_limit: float = 0.5  # Seconds between requests
    timeout: int = 30  # Request timeout in seconds

    def get_requests_per_second(self) -> float:
        """Calculate requests per second based on rate limit."""
        return 1.0 / self.rate_limit if self.rate_limit > 0 else float("inf")


@dataclass
class AppConfig:
    """Main application configuration."""

    store: UserStoreConfig | None = None
    api: APIConfig | None = None
    upload_dir: str | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        """Initialize defaults if not provided."""
        if self.api is None:
            self.api = APIConfig()
        if self.upload_dir is None:
            self.upload_dir = tempfile.gettempdir()

    def to_dict(self) -> dict[str, Any]:
        """Convert entire config to dictionary format."""
        result: dict[str, Any] = {"upload_dir": self.upload_dir, "debug": self.debug}

        if self.store:
            result["store"] = self.store.to_dict()

        if self.api:
            result["api"] = {
                "rate_limit": self.api.rate_limit,
                "timeout": self.api.timeout,
                "requests_per_second": self.api.get_requests_per_second(),
            }

        return result
