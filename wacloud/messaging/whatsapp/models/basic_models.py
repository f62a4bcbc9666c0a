"""
Response models for WhatsApp Cloud API calls.

Success shapes the transport decodes 2xx bodies into. Fields the provider does
not always send are optional; a missing required field is a DecodeFailure.
"""

from pydantic import BaseModel, ConfigDict, Field


class ContactInfo(BaseModel):
    """Contact entry echoed back by the messages endpoint."""

    model_config = ConfigDict(extra="allow")

    input: str = Field(..., description="Phone number as given in the request")
    wa_id: str = Field(..., description="Resolved WhatsApp ID")


class MessageInfo(BaseModel):
    """Message entry returned by the messages endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="WhatsApp message ID (wamid.*)")
    message_status: str | None = Field(
        None, description="Only present for some message kinds, e.g. 'accepted'"
    )


class MessageResponse(BaseModel):
    """Response of POST /{phone-number-id}/messages."""

    model_config = ConfigDict(extra="allow")

    messaging_product: str = Field("whatsapp", description="Always 'whatsapp'")
    contacts: list[ContactInfo] = Field(default_factory=list)
    messages: list[MessageInfo] = Field(..., min_length=1)

    @property
    def message_id(self) -> str:
        """ID of the (first) message that was sent."""
        return self.messages[0].id


class SuccessResponse(BaseModel):
    """Generic `{"success": true}` response."""

    model_config = ConfigDict(extra="allow")

    success: bool


class BasicTextMessage(BaseModel):
    """Outgoing text message parameters."""

    text: str = Field(
        ..., min_length=1, max_length=4096, description="Text content of the message"
    )
    recipient: str = Field(
        ..., min_length=1, description="Recipient phone number or user identifier"
    )
    reply_to_message_id: str | None = Field(
        None, description="Message ID to reply to (creates a thread)"
    )
    preview_url: bool = Field(
        False, description="Render a preview for the first URL in the message"
    )
