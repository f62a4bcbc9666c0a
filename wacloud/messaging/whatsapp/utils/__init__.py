"""WhatsApp utility functions and helpers."""

from wacloud.messaging.whatsapp.utils.error_helpers import (
    classify_error,
    parse_error_envelope,
    parse_retry_after,
)

__all__ = [
    "classify_error",
    "parse_error_envelope",
    "parse_retry_after",
]
