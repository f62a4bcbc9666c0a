from .base_processor import BaseWebhookProcessor
from .whatsapp_processor import WhatsAppWebhookProcessor, verify_subscription

__all__ = ["BaseWebhookProcessor", "WhatsAppWebhookProcessor", "verify_subscription"]
