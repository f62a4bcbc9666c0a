"""WhatsApp location message schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class LocationContent(BaseModel):
    """Location message content."""

    model_config = ConfigDict(extra="allow", frozen=True)

    latitude: float = Field(..., description="Latitude coordinate of the location")
    longitude: float = Field(..., description="Longitude coordinate of the location")
    name: str | None = Field(None, description="Name or title of the location")
    address: str | None = Field(
        None, description="Human-readable address of the location"
    )
    url: str | None = Field(
        None, description="URL with more information about the location"
    )

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        """Validate latitude is within valid range."""
        if not -90.0 <= v <= 90.0:
            raise ValueError("Latitude must be between -90.0 and 90.0")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        """Validate longitude is within valid range."""
        if not -180.0 <= v <= 180.0:
            raise ValueError("Longitude must be between -180.0 and 180.0")
        return v


class WhatsAppLocationMessage(BaseWebhookMessage):
    """Inbound location pin."""

    type: Literal["location"]
    location: LocationContent
