"""
Normalized webhook events.

Every message, status and error record of a webhook delivery becomes exactly
one frozen event. Events form a closed union discriminated by `event_type`;
UnknownEvent is the catch-all for records this library cannot interpret, so
callers can match exhaustively and still accept new provider types.

Example:
    for event in processor.process(payload).unwrap():
        match event:
            case TextMessageEvent(sender=sender, body=body):
                ...
            case MessageFailedEvent(error_code=code):
                ...
            case UnknownEvent():
                ...
"""

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from wacloud.webhooks.core.types import RecordKind, WebhookEventType
from wacloud.webhooks.whatsapp.base_models import (
    Conversation,
    MessageContext,
    MessageError,
    Pricing,
)
from wacloud.webhooks.whatsapp.message_types import (
    ContactCard,
    LocationContent,
    MediaContent,
    OrderContent,
    SystemContent,
)


class BaseWebhookEvent(BaseModel):
    """Fields carried by every event: where the record came from."""

    model_config = ConfigDict(frozen=True)

    waba_id: str = Field("", description="WhatsApp Business Account ID of the entry")
    phone_number_id: str = Field("", description="Business phone number ID")


# ================================================================
# Inbound messages
# ================================================================


class MessageEvent(BaseWebhookEvent):
    message_id: str
    sender: str = Field(..., description="Sender's WhatsApp ID")
    sender_name: str | None = Field(None, description="Sender's profile name")
    timestamp: int
    context: MessageContext | None = None

    @property
    def is_reply(self) -> bool:
        return self.context is not None and self.context.is_reply


class TextMessageEvent(MessageEvent):
    event_type: Literal["text_message"] = "text_message"
    body: str


class ImageMessageEvent(MessageEvent):
    event_type: Literal["image_message"] = "image_message"
    media: MediaContent


class VideoMessageEvent(MessageEvent):
    event_type: Literal["video_message"] = "video_message"
    media: MediaContent


class AudioMessageEvent(MessageEvent):
    event_type: Literal["audio_message"] = "audio_message"
    media: MediaContent


class DocumentMessageEvent(MessageEvent):
    event_type: Literal["document_message"] = "document_message"
    media: MediaContent


class StickerMessageEvent(MessageEvent):
    event_type: Literal["sticker_message"] = "sticker_message"
    media: MediaContent


class LocationMessageEvent(MessageEvent):
    event_type: Literal["location_message"] = "location_message"
    location: LocationContent


class ContactsMessageEvent(MessageEvent):
    event_type: Literal["contacts_message"] = "contacts_message"
    contacts: tuple[ContactCard, ...]


class ReactionEvent(MessageEvent):
    """A reaction to an earlier message; emoji None means it was removed."""

    event_type: Literal["reaction"] = "reaction"
    reacted_message_id: str
    emoji: str | None = None

    @property
    def is_removal(self) -> bool:
        return not self.emoji


class ButtonReplyEvent(MessageEvent):
    """Tap on an interactive reply button or a template quick-reply button."""

    event_type: Literal["button_reply"] = "button_reply"
    button_id: str
    title: str


class ListReplyEvent(MessageEvent):
    event_type: Literal["list_reply"] = "list_reply"
    row_id: str
    title: str
    description: str | None = None


class OrderMessageEvent(MessageEvent):
    event_type: Literal["order_message"] = "order_message"
    order: OrderContent


class SystemMessageEvent(MessageEvent):
    event_type: Literal["system_message"] = "system_message"
    system: SystemContent


# ================================================================
# Outbound message statuses
# ================================================================


class StatusEvent(BaseWebhookEvent):
    message_id: str
    recipient_id: str = ""
    timestamp: int
    conversation: Conversation | None = None
    pricing: Pricing | None = None
    biz_opaque_callback_data: str | None = None


class MessageSentEvent(StatusEvent):
    event_type: Literal["message_sent"] = "message_sent"


class MessageDeliveredEvent(StatusEvent):
    event_type: Literal["message_delivered"] = "message_delivered"


class MessageReadEvent(StatusEvent):
    event_type: Literal["message_read"] = "message_read"


class MessageFailedEvent(StatusEvent):
    """Delivery failure; error_* fields come from the first attached error."""

    event_type: Literal["message_failed"] = "message_failed"
    error_code: int | None = None
    error_title: str | None = None
    error_message: str | None = None
    error_details: str | None = None
    errors: tuple[MessageError, ...] = ()


# ================================================================
# Errors and unknown records
# ================================================================


class WebhookErrorEvent(BaseWebhookEvent):
    """Error reported at the value level, not tied to one outbound message."""

    event_type: Literal["webhook_error"] = "webhook_error"
    code: int
    title: str | None = None
    message: str | None = None
    details: str | None = None


class UnknownEvent(BaseWebhookEvent):
    """
    A record this library could not interpret.

    raw_type holds the record's discriminant (message type or status string)
    when there was one; raw holds the record exactly as received.
    """

    event_type: Literal["unknown"] = "unknown"
    record_kind: RecordKind
    raw_type: str | None = None
    raw: Any = None
    reason: str | None = Field(None, description="Why the record was not mapped")


WebhookEvent = Annotated[
    Union[
        TextMessageEvent,
        ImageMessageEvent,
        VideoMessageEvent,
        AudioMessageEvent,
        DocumentMessageEvent,
        StickerMessageEvent,
        LocationMessageEvent,
        ContactsMessageEvent,
        ReactionEvent,
        ButtonReplyEvent,
        ListReplyEvent,
        OrderMessageEvent,
        SystemMessageEvent,
        MessageSentEvent,
        MessageDeliveredEvent,
        MessageReadEvent,
        MessageFailedEvent,
        WebhookErrorEvent,
        UnknownEvent,
    ],
    Field(discriminator="event_type"),
]

EVENT_MODELS: dict[WebhookEventType, type[BaseWebhookEvent]] = {
    WebhookEventType(model.model_fields["event_type"].default): model
    for model in get_args(get_args(WebhookEvent)[0])
}

webhook_event_adapter: TypeAdapter[WebhookEvent] = TypeAdapter(WebhookEvent)
