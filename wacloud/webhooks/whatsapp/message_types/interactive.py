"""
WhatsApp interactive message schema.

Replies to reply-button and list messages arrive with type "interactive"; the
nested `interactive.type` says which reply object is present.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage
from wacloud.webhooks.core.types import InteractiveType


class ButtonReply(BaseModel):
    """Reply data from an interactive button."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(..., description="Button ID (set when creating the button)")
    title: str = Field(..., description="Button label text displayed to user")


class ListReply(BaseModel):
    """Reply data from an interactive list selection."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(..., description="Row ID (set when creating the list row)")
    title: str = Field(..., description="Row title displayed to user")
    description: str | None = Field(None, description="Row description")


class InteractiveContent(BaseModel):
    """Interactive reply content; holds button_reply or list_reply."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Type of interactive reply")
    button_reply: ButtonReply | None = None
    list_reply: ListReply | None = None

    @property
    def reply(self) -> ButtonReply | ListReply | None:
        """The reply object matching `type`, or None when it is absent."""
        if self.type == InteractiveType.BUTTON_REPLY.value:
            return self.button_reply
        if self.type == InteractiveType.LIST_REPLY.value:
            return self.list_reply
        return None


class WhatsAppInteractiveMessage(BaseWebhookMessage):
    """Inbound reply to an interactive message."""

    type: Literal["interactive"]
    interactive: InteractiveContent
