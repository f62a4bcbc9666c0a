"""
WhatsApp button message schema.

Sent when a user taps a quick-reply button of a template message. Not to be
confused with interactive button replies.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class ButtonContent(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    payload: str = Field(..., description="Developer-defined button payload")
    text: str = Field(..., description="Button label text")


class WhatsAppButtonMessage(BaseWebhookMessage):
    type: Literal["button"]
    button: ButtonContent
