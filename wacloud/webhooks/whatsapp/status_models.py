"""
WhatsApp message status schema.

Status updates report what happened to messages the business sent: sent,
delivered, read or failed.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wacloud.webhooks.whatsapp.base_models import Conversation, MessageError, Pricing


class WhatsAppMessageStatus(BaseModel):
    """
    WhatsApp message status record.

    The status string is kept as received; states this library does not know
    are reported as unknown events by the processor rather than rejected here.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field(..., description="WhatsApp message ID that this status refers to")
    status: str = Field(..., description="Message delivery status")
    timestamp: int = Field(..., description="Unix timestamp of the status event")
    recipient_id: str = Field(
        "", description="WhatsApp ID of the recipient (may be empty)"
    )
    biz_opaque_callback_data: str | None = Field(
        None, description="Business opaque data (only if set when sending message)"
    )

    # Present for sent and first delivered/read
    conversation: Conversation | None = None
    pricing: Pricing | None = None

    # Only for failed status
    errors: tuple[MessageError, ...] = ()

    @field_validator("errors", mode="before")
    @classmethod
    def null_errors_as_empty(cls, v: Any) -> Any:
        """A null errors field means no errors; a lone error object is wrapped."""
        if v is None:
            return ()
        if isinstance(v, dict):
            return (v,)
        return v

    @property
    def first_error(self) -> MessageError | None:
        return self.errors[0] if self.errors else None
