"""
WhatsApp media message schemas.

Image, video, audio, document and sticker records all carry a media object
with the same core fields under a key named after the type.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class MediaContent(BaseModel):
    """Media object of an inbound media message."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(..., description="Media ID, usable with the media endpoints")
    mime_type: str | None = Field(None, description="MIME type of the media")
    sha256: str | None = Field(None, description="SHA256 hash of the media")
    caption: str | None = Field(None, description="Caption (image, video, document)")
    filename: str | None = Field(None, description="Original file name (document)")
    voice: bool | None = Field(None, description="True for voice notes (audio)")
    animated: bool | None = Field(None, description="True for animated stickers")


class WhatsAppImageMessage(BaseWebhookMessage):
    type: Literal["image"]
    image: MediaContent


class WhatsAppVideoMessage(BaseWebhookMessage):
    type: Literal["video"]
    video: MediaContent


class WhatsAppAudioMessage(BaseWebhookMessage):
    type: Literal["audio"]
    audio: MediaContent


class WhatsAppDocumentMessage(BaseWebhookMessage):
    type: Literal["document"]
    document: MediaContent


class WhatsAppStickerMessage(BaseWebhookMessage):
    type: Literal["sticker"]
    sticker: MediaContent
