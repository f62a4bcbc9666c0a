"""
Base class for inbound WhatsApp message records.

Every record under `value.messages` shares the sender, id, timestamp, type and
optional context fields; the per-type content lives on the subclasses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.whatsapp.base_models import MessageContext


class BaseWebhookMessage(BaseModel):
    """Fields common to all inbound message records."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    from_: str = Field(..., alias="from", description="Sender's WhatsApp ID")
    id: str = Field(..., description="Provider message ID")
    timestamp: int = Field(..., description="Unix timestamp of the message")
    type: str = Field(..., description="Message type discriminant")
    context: MessageContext | None = Field(
        None, description="Reply or forward context"
    )

    @property
    def sender(self) -> str:
        return self.from_

    def common_event_fields(self) -> dict[str, Any]:
        """Fields every message event copies from its record."""
        return {
            "message_id": self.id,
            "sender": self.from_,
            "timestamp": self.timestamp,
            "context": self.context,
        }

    def to_record(self) -> dict[str, Any]:
        """Re-encode the record in webhook wire format."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
