from .base_message import BaseWebhookMessage
from .types import (
    InteractiveType,
    MessageStatus,
    MessageType,
    RecordKind,
    WebhookEventType,
)

__all__ = [
    "BaseWebhookMessage",
    "InteractiveType",
    "MessageStatus",
    "MessageType",
    "RecordKind",
    "WebhookEventType",
]
