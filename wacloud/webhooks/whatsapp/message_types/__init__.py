"""
WhatsApp inbound message record schemas, one model per `type` value.

MESSAGE_MODELS maps each supported type to the model that parses it.
"""

from wacloud.webhooks.core.base_message import BaseWebhookMessage
from wacloud.webhooks.core.types import MessageType

from .button import ButtonContent, WhatsAppButtonMessage
from .contact import ContactCard, ContactName, ContactPhone, WhatsAppContactMessage
from .interactive import (
    ButtonReply,
    InteractiveContent,
    ListReply,
    WhatsAppInteractiveMessage,
)
from .location import LocationContent, WhatsAppLocationMessage
from .media import (
    MediaContent,
    WhatsAppAudioMessage,
    WhatsAppDocumentMessage,
    WhatsAppImageMessage,
    WhatsAppStickerMessage,
    WhatsAppVideoMessage,
)
from .order import OrderContent, ProductItem, WhatsAppOrderMessage
from .reaction import ReactionContent, WhatsAppReactionMessage
from .system import SystemContent, WhatsAppSystemMessage
from .text import TextContent, WhatsAppTextMessage

MESSAGE_MODELS: dict[MessageType, type[BaseWebhookMessage]] = {
    MessageType.TEXT: WhatsAppTextMessage,
    MessageType.IMAGE: WhatsAppImageMessage,
    MessageType.VIDEO: WhatsAppVideoMessage,
    MessageType.AUDIO: WhatsAppAudioMessage,
    MessageType.DOCUMENT: WhatsAppDocumentMessage,
    MessageType.STICKER: WhatsAppStickerMessage,
    MessageType.LOCATION: WhatsAppLocationMessage,
    MessageType.CONTACTS: WhatsAppContactMessage,
    MessageType.REACTION: WhatsAppReactionMessage,
    MessageType.INTERACTIVE: WhatsAppInteractiveMessage,
    MessageType.BUTTON: WhatsAppButtonMessage,
    MessageType.ORDER: WhatsAppOrderMessage,
    MessageType.SYSTEM: WhatsAppSystemMessage,
}

__all__ = [
    "MESSAGE_MODELS",
    "BaseWebhookMessage",
    # Text
    "TextContent",
    "WhatsAppTextMessage",
    # Media
    "MediaContent",
    "WhatsAppImageMessage",
    "WhatsAppVideoMessage",
    "WhatsAppAudioMessage",
    "WhatsAppDocumentMessage",
    "WhatsAppStickerMessage",
    # Location and contacts
    "LocationContent",
    "WhatsAppLocationMessage",
    "ContactCard",
    "ContactName",
    "ContactPhone",
    "WhatsAppContactMessage",
    # Reactions and replies
    "ReactionContent",
    "WhatsAppReactionMessage",
    "ButtonReply",
    "ListReply",
    "InteractiveContent",
    "WhatsAppInteractiveMessage",
    "ButtonContent",
    "WhatsAppButtonMessage",
    # Commerce and system
    "ProductItem",
    "OrderContent",
    "WhatsAppOrderMessage",
    "SystemContent",
    "WhatsAppSystemMessage",
]
