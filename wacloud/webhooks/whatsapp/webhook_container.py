"""
WhatsApp webhook container schema.

Models the envelope: payload -> entry[] -> changes[] -> value. The envelope is
validated strictly (a missing entry array, an entry without changes or a
change without a value object is a malformed delivery), while the records
inside a value are kept raw so that each one can be parsed on its own.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wacloud.webhooks.whatsapp.base_models import WhatsAppMetadata


class WebhookValue(BaseModel):
    """
    Value of one change.

    messages, statuses and errors may be present at the same time. Values of
    non-message fields (account updates, template status, ...) have other
    shapes and simply leave these lists empty.
    """

    model_config = ConfigDict(extra="allow")

    messaging_product: str | None = Field(None, description="Always 'whatsapp'")
    metadata: WhatsAppMetadata = Field(default_factory=WhatsAppMetadata)
    contacts: list[Any] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    statuses: list[Any] = Field(default_factory=list)
    errors: list[Any] = Field(default_factory=list)

    @field_validator("metadata", mode="before")
    @classmethod
    def lenient_metadata(cls, v: Any) -> Any:
        """Malformed metadata yields empty identifiers instead of a failure."""
        try:
            return WhatsAppMetadata.model_validate(v)
        except ValidationError:
            return WhatsAppMetadata()

    @field_validator("contacts", "messages", "statuses", "errors", mode="before")
    @classmethod
    def as_record_list(cls, v: Any) -> list[Any]:
        """A lone record is treated as a one-element list; null as empty."""
        if v is None:
            return []
        if isinstance(v, list):
            return v
        return [v]

    @property
    def is_empty(self) -> bool:
        return not (self.messages or self.statuses or self.errors)


class WebhookChange(BaseModel):
    """A change notification: a `field` discriminant and its value."""

    model_config = ConfigDict(extra="allow")

    field: str = Field("", description="Subscribed field, e.g. 'messages'")
    value: WebhookValue


class WebhookEntry(BaseModel):
    """One entry per WhatsApp Business Account."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field("", description="WhatsApp Business Account ID")
    changes: list[WebhookChange]


class WhatsAppWebhook(BaseModel):
    """Top-level webhook delivery."""

    model_config = ConfigDict(extra="allow")

    object: str = Field("", description="Always 'whatsapp_business_account'")
    entry: list[WebhookEntry]

    @property
    def record_count(self) -> int:
        """Number of message, status and error records in the delivery."""
        return sum(
            len(change.value.messages)
            + len(change.value.statuses)
            + len(change.value.errors)
            for entry in self.entry
            for change in entry.changes
        )
