"""
WhatsApp Cloud API messaging.

Usage:
    from wacloud.messaging.whatsapp import WhatsAppClient, WhatsAppMessenger
    from wacloud.messaging.whatsapp import WhatsAppMediaHandler
"""

from .client import WhatsAppClient, WhatsAppFormDataBuilder, WhatsAppUrlBuilder
from .handlers import WhatsAppMediaHandler
from .messenger import WhatsAppMessenger

__all__ = [
    "WhatsAppClient",
    "WhatsAppUrlBuilder",
    "WhatsAppFormDataBuilder",
    "WhatsAppMessenger",
    "WhatsAppMediaHandler",
]
