"""
Immutable per-client configuration.

A ClientConfig is built once (explicitly or from the environment settings) and
passed to WhatsAppClient. It is frozen, so any number of in-flight requests can
read it concurrently.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wacloud.core.config.settings import (
    DEFAULT_API_VERSION,
    DEFAULT_REQUEST_TIMEOUT,
    GRAPH_API_URL,
    Settings,
    settings,
)


class ClientConfig(BaseModel):
    """Credentials and endpoint configuration for one WhatsApp Business number."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    access_token: str = Field(
        ..., min_length=1, repr=False, description="Graph API bearer token"
    )
    phone_number_id: str = Field(
        ..., min_length=1, description="WhatsApp Business phone number ID"
    )
    waba_id: str | None = Field(
        None, description="WhatsApp Business Account ID (for account-level resources)"
    )
    api_version: str = Field(DEFAULT_API_VERSION, description="Graph API version")
    base_url: str = Field(GRAPH_API_URL, description="Graph API base URL")
    timeout: float = Field(
        DEFAULT_REQUEST_TIMEOUT, gt=0, description="Per-request deadline in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Ensure the base URL has no trailing slash."""
        return v.rstrip("/")

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Accept "21.0" as well as "v21.0"."""
        v = v.strip("/")
        if not v:
            raise ValueError("API version cannot be empty")
        return v if v.startswith("v") else f"v{v}"

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ClientConfig":
        """Build a configuration from environment settings.

        Raises:
            ValueError: If WP_ACCESS_TOKEN or WP_PHONE_ID is missing
        """
        source = source or settings
        source.validate_whatsapp_credentials()
        return cls(
            access_token=source.wp_access_token,
            phone_number_id=source.wp_phone_id,
            waba_id=source.wp_bid,
            api_version=source.api_version,
            base_url=source.base_url,
            timeout=source.request_timeout,
        )

    @property
    def masked_token(self) -> str:
        """Token prefix safe to put in logs."""
        return f"{self.access_token[:6]}..." if self.access_token else ""
