"""
Settings for the wacloud WhatsApp Cloud API client.

Simple, reliable environment variable configuration. Credentials are read here
but only validated when a client configuration is built from them, so importing
the library never fails on a machine without WhatsApp credentials.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")

DEFAULT_API_VERSION = "v21.0"
GRAPH_API_URL = "https://graph.facebook.com"
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


class Settings:
    """Library settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & General Configuration
        # ================================================================
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "PROD")

        # ================================================================
        # Graph API Configuration
        # ================================================================
        self.api_version: str = os.getenv("API_VERSION", DEFAULT_API_VERSION)
        self.base_url: str = os.getenv("BASE_URL", GRAPH_API_URL)
        self.request_timeout: float = float(
            os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        )

        # ================================================================
        # WhatsApp Configuration
        # ================================================================
        self.wp_access_token: str | None = os.getenv("WP_ACCESS_TOKEN")
        self.wp_phone_id: str | None = os.getenv("WP_PHONE_ID")
        self.wp_bid: str | None = os.getenv("WP_BID")

        # Used by the webhook subscription handshake (hub.verify_token)
        self.whatsapp_webhook_verify_token: str | None = os.getenv(
            "WHATSAPP_WEBHOOK_VERIFY_TOKEN"
        )

        # Whether "sent" status updates become events or are dropped
        self.emit_sent_status: bool = _env_flag("EMIT_SENT_STATUS", True)

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "PROD"
        self.environment = self.environment.upper()

        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be a positive number of seconds")

    def validate_whatsapp_credentials(self):
        """Validate required WhatsApp credentials."""
        if not self.wp_access_token:
            raise ValueError("WP_ACCESS_TOKEN is required")
        if not self.wp_phone_id:
            raise ValueError("WP_PHONE_ID is required")

    @property
    def has_credentials(self) -> bool:
        """Check if both the access token and phone number ID are configured."""
        return bool(self.wp_access_token and self.wp_phone_id)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
