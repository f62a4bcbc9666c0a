"""
WhatsApp contacts message schema.

A contacts message shares one or more contact cards. Only the name is
required by the provider; phones, emails, addresses, organization and URLs are
all optional.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class ContactName(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    formatted_name: str = Field(..., description="Full name as displayed")
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None


class ContactPhone(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    phone: str | None = Field(None, description="Phone number as shared")
    type: str | None = Field(None, description="CELL, HOME, WORK, ...")
    wa_id: str | None = Field(None, description="WhatsApp ID, when on WhatsApp")


class ContactEmail(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    email: str | None = None
    type: str | None = None


class ContactOrg(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    company: str | None = None
    department: str | None = None
    title: str | None = None


class ContactCard(BaseModel):
    """One shared contact card."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: ContactName
    phones: tuple[ContactPhone, ...] = ()
    emails: tuple[ContactEmail, ...] = ()
    org: ContactOrg | None = None
    birthday: str | None = None

    @property
    def whatsapp_ids(self) -> list[str]:
        """WhatsApp IDs of the card's phones that are on WhatsApp."""
        return [phone.wa_id for phone in self.phones if phone.wa_id]


class WhatsAppContactMessage(BaseWebhookMessage):
    """Inbound contacts message."""

    type: Literal["contacts"]
    contacts: tuple[ContactCard, ...] = Field(..., min_length=1)
