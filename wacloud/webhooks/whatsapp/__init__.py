"""
WhatsApp webhook schemas.

Usage:
    from wacloud.webhooks.whatsapp import WhatsAppWebhook, WhatsAppMessageStatus
    from wacloud.webhooks.whatsapp.message_types import WhatsAppTextMessage
"""

from .base_models import (
    ContactProfile,
    Conversation,
    ErrorData,
    MessageContext,
    MessageError,
    Pricing,
    WhatsAppContact,
    WhatsAppMetadata,
)
from .status_models import WhatsAppMessageStatus
from .webhook_container import (
    WebhookChange,
    WebhookEntry,
    WebhookValue,
    WhatsAppWebhook,
)

__all__ = [
    # Envelope
    "WhatsAppWebhook",
    "WebhookEntry",
    "WebhookChange",
    "WebhookValue",
    # Shared models
    "WhatsAppMetadata",
    "WhatsAppContact",
    "ContactProfile",
    "MessageContext",
    "MessageError",
    "ErrorData",
    "Conversation",
    "Pricing",
    # Statuses
    "WhatsAppMessageStatus",
]
