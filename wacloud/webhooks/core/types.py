"""
Core type definitions for webhook processing.

Enums shared by the webhook record models, the event model and the processor.
"""

from enum import Enum


class MessageType(str, Enum):
    """Values of the `type` field of an inbound message record."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACTS = "contacts"
    REACTION = "reaction"
    INTERACTIVE = "interactive"
    BUTTON = "button"
    ORDER = "order"
    SYSTEM = "system"


class InteractiveType(str, Enum):
    """Values of `interactive.type` that carry a reply."""

    BUTTON_REPLY = "button_reply"
    LIST_REPLY = "list_reply"


class MessageStatus(str, Enum):
    """Delivery states reported for outbound messages."""

    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"


class WebhookEventType(str, Enum):
    """Discriminant of every normalized webhook event."""

    TEXT_MESSAGE = "text_message"
    IMAGE_MESSAGE = "image_message"
    VIDEO_MESSAGE = "video_message"
    AUDIO_MESSAGE = "audio_message"
    DOCUMENT_MESSAGE = "document_message"
    STICKER_MESSAGE = "sticker_message"
    LOCATION_MESSAGE = "location_message"
    CONTACTS_MESSAGE = "contacts_message"
    REACTION = "reaction"
    BUTTON_REPLY = "button_reply"
    LIST_REPLY = "list_reply"
    ORDER_MESSAGE = "order_message"
    SYSTEM_MESSAGE = "system_message"
    MESSAGE_SENT = "message_sent"
    MESSAGE_DELIVERED = "message_delivered"
    MESSAGE_READ = "message_read"
    MESSAGE_FAILED = "message_failed"
    WEBHOOK_ERROR = "webhook_error"
    UNKNOWN = "unknown"


class RecordKind(str, Enum):
    """Which group of a change value an unknown event came from."""

    MESSAGE = "message"
    STATUS = "status"
    ERROR = "error"
