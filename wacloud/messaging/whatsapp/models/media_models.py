"""
Media models for WhatsApp messaging.

Response shapes of the media endpoints and the enum of media kinds that can be
attached to outgoing messages.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Media kinds accepted by the messages endpoint."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"


class MediaUploadResponse(BaseModel):
    """Response of POST /{phone-number-id}/media."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Media ID to reference in messages")


class MediaUrlResponse(BaseModel):
    """Response of GET /{media-id}."""

    model_config = ConfigDict(extra="allow")

    messaging_product: str = Field("whatsapp")
    url: str = Field(..., description="Short-lived download URL")
    mime_type: str = Field(..., description="MIME type of the media")
    sha256: str | None = Field(None, description="SHA256 hash of the media")
    file_size: int | None = Field(None, description="Size in bytes")
    id: str = Field(..., description="Media ID")
