"""WhatsApp text message schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class TextContent(BaseModel):
    """Text message content."""

    model_config = ConfigDict(extra="allow", frozen=True)

    body: str = Field(..., description="Text content of the message")


class WhatsAppTextMessage(BaseWebhookMessage):
    """Inbound text message."""

    type: Literal["text"]
    text: TextContent
