"""
wacloud messaging components.

Usage:
    from wacloud.messaging.whatsapp import WhatsAppClient, WhatsAppMessenger
"""

from .whatsapp import (
    WhatsAppClient,
    WhatsAppMediaHandler,
    WhatsAppMessenger,
)

__all__ = ["WhatsAppClient", "WhatsAppMessenger", "WhatsAppMediaHandler"]
