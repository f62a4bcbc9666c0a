"""WhatsApp system message schema (user changed number, identity changed)."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class SystemContent(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    body: str | None = Field(None, description="Human readable description")
    type: str | None = Field(None, description="user_changed_number, ...")
    customer: str | None = Field(None, description="WhatsApp ID of the customer")
    wa_id: str | None = Field(None, description="New WhatsApp ID, when it changed")


class WhatsAppSystemMessage(BaseWebhookMessage):
    type: Literal["system"]
    system: SystemContent
