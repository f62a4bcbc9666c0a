"""
Webhook schemas and normalized events.

Usage:
    # Events produced by the processor
    from wacloud.webhooks import WebhookEvent, TextMessageEvent, UnknownEvent

    # Raw WhatsApp webhook schemas
    from wacloud.webhooks.whatsapp import WhatsAppWebhook, WhatsAppMetadata
"""

from .core.types import MessageStatus, MessageType, RecordKind, WebhookEventType
from .events import (
    EVENT_MODELS,
    AudioMessageEvent,
    BaseWebhookEvent,
    ButtonReplyEvent,
    ContactsMessageEvent,
    DocumentMessageEvent,
    ImageMessageEvent,
    ListReplyEvent,
    LocationMessageEvent,
    MessageDeliveredEvent,
    MessageEvent,
    MessageFailedEvent,
    MessageReadEvent,
    MessageSentEvent,
    OrderMessageEvent,
    ReactionEvent,
    StatusEvent,
    StickerMessageEvent,
    SystemMessageEvent,
    TextMessageEvent,
    UnknownEvent,
    VideoMessageEvent,
    WebhookErrorEvent,
    WebhookEvent,
)
from .whatsapp.webhook_container import WhatsAppWebhook

__all__ = [
    # Types
    "WebhookEventType",
    "MessageType",
    "MessageStatus",
    "RecordKind",
    # Events
    "WebhookEvent",
    "EVENT_MODELS",
    "BaseWebhookEvent",
    "MessageEvent",
    "StatusEvent",
    "TextMessageEvent",
    "ImageMessageEvent",
    "VideoMessageEvent",
    "AudioMessageEvent",
    "DocumentMessageEvent",
    "StickerMessageEvent",
    "LocationMessageEvent",
    "ContactsMessageEvent",
    "ReactionEvent",
    "ButtonReplyEvent",
    "ListReplyEvent",
    "OrderMessageEvent",
    "SystemMessageEvent",
    "MessageSentEvent",
    "MessageDeliveredEvent",
    "MessageReadEvent",
    "MessageFailedEvent",
    "WebhookErrorEvent",
    "UnknownEvent",
    # Envelope
    "WhatsAppWebhook",
]
