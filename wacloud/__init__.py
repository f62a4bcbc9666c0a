"""
wacloud - WhatsApp Cloud API client

Typed helpers for the WhatsApp Business Cloud API:
- One authenticated transport that returns ApiResult values instead of raising
- A closed error taxonomy classified from the Graph API error envelope
- A webhook processor that turns deliveries into a flat tuple of typed events

Clean Import Interface:
- Only the essentials are exposed at top level
- Record and event models live under wacloud.webhooks, outbound payload
  models under wacloud.messaging.whatsapp.models
"""

# Dynamic version from pyproject.toml
from .core.config import ClientConfig, settings
from .messaging.whatsapp import WhatsAppClient, WhatsAppMediaHandler, WhatsAppMessenger
from .messaging.whatsapp.models.error_models import ApiError, ApiResult, ApiResultError
from .processors import WhatsAppWebhookProcessor, verify_subscription
from .webhooks import WebhookEvent, WebhookEventType

__version__ = settings.version

__all__ = [
    # Configuration
    "ClientConfig",
    # Transport and resources
    "WhatsAppClient",
    "WhatsAppMessenger",
    "WhatsAppMediaHandler",
    # Results
    "ApiResult",
    "ApiError",
    "ApiResultError",
    # Webhooks
    "WhatsAppWebhookProcessor",
    "WebhookEvent",
    "WebhookEventType",
    "verify_subscription",
]
