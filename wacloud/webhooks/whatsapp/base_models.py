"""
Shared WhatsApp webhook models.

Building blocks reused by the message, status and error records of a change
value. Models accept unknown fields so that new provider attributes never turn
a well-formed record into a parse failure.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class WhatsAppMetadata(BaseModel):
    """
    Business phone number metadata from WhatsApp webhooks.

    Present in all message webhooks to identify the business phone number
    that received or sent the message.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    display_phone_number: str = Field(
        "", description="Business display phone number (formatted for display)"
    )
    phone_number_id: str = Field(
        "", description="Business phone number ID (WhatsApp internal identifier)"
    )


class ContactProfile(BaseModel):
    """User profile information."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(None, description="User's display name")


class WhatsAppContact(BaseModel):
    """Sender information attached to inbound messages."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    wa_id: str = Field(..., description="WhatsApp user ID (usually the phone number)")
    profile: ContactProfile | None = Field(None, description="User profile")

    @property
    def display_name(self) -> str | None:
        return self.profile.name if self.profile else None


class MessageContext(BaseModel):
    """
    Context information for WhatsApp messages.

    Used for replies, forwards, and message business button interactions.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    # For replies and message business buttons
    from_: str | None = Field(
        None, alias="from", description="Original message sender (for replies)"
    )
    id: str | None = Field(
        None, description="ID of the original message being replied to or referenced"
    )

    # For forwarded messages
    forwarded: bool | None = Field(
        None, description="True if forwarded 5 times or less"
    )
    frequently_forwarded: bool | None = Field(
        None, description="True if forwarded more than 5 times"
    )

    @property
    def is_reply(self) -> bool:
        return self.id is not None


class ErrorData(BaseModel):
    """Error details for failed messages."""

    model_config = ConfigDict(extra="allow")

    details: str | None = Field(None, description="Detailed error description")


class MessageError(BaseModel):
    """Error object used by failed statuses and value-level errors."""

    model_config = ConfigDict(extra="allow", frozen=True)

    code: int = Field(..., description="Error code")
    title: str | None = Field(None, description="Error title")
    message: str | None = Field(None, description="Error message")
    error_data: ErrorData | None = Field(None, description="Additional error data")
    href: str | None = Field(None, description="Link to the error code reference")

    @property
    def details(self) -> str | None:
        return self.error_data.details if self.error_data else None


class ConversationOrigin(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Conversation category")


class Conversation(BaseModel):
    """Conversation information for message status."""

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Conversation ID")
    expiration_timestamp: str | None = Field(
        None, description="Unix timestamp when conversation expires"
    )
    origin: ConversationOrigin | None = Field(None, description="Conversation origin")


class Pricing(BaseModel):
    """Pricing information for message status."""

    model_config = ConfigDict(extra="allow", frozen=True)

    billable: bool | None = Field(None, description="Whether message is billable")
    pricing_model: str | None = Field(
        None, description="Pricing model (CBP=conversation-based, PMP=per-message)"
    )
    category: str | None = Field(None, description="Pricing category")
    type: str | None = Field(None, description="Pricing type")


def sender_names(contacts: list[Any]) -> dict[str, str]:
    """Map wa_id to profile name, skipping contact records that do not parse."""
    names: dict[str, str] = {}
    for raw in contacts:
        try:
            contact = WhatsAppContact.model_validate(raw)
        except ValidationError:
            continue
        if contact.display_name:
            names[contact.wa_id] = contact.display_name
    return names
