"""WhatsApp service handlers."""

from .whatsapp_media_handler import WhatsAppMediaHandler

__all__ = ["WhatsAppMediaHandler"]
