"""WhatsApp reaction message schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class ReactionContent(BaseModel):
    """Reaction content. A missing emoji means the reaction was removed."""

    model_config = ConfigDict(extra="allow", frozen=True)

    message_id: str = Field(..., description="ID of the message reacted to")
    emoji: str | None = Field(None, description="Emoji used for the reaction")


class WhatsAppReactionMessage(BaseWebhookMessage):
    type: Literal["reaction"]
    reaction: ReactionContent
