"""
Base processor abstraction for webhook normalization.

Processors turn a decoded webhook delivery into a flat tuple of events. They
hold no per-call state, so one instance can serve concurrent deliveries.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from wacloud.core.logging.logger import get_logger
from wacloud.messaging.whatsapp.models.error_models import ApiResult, DecodeFailure
from wacloud.webhooks.core.base_message import BaseWebhookMessage
from wacloud.webhooks.events import WebhookEvent


class BaseWebhookProcessor(ABC):
    """
    Webhook processor base class.

    Subclasses register one handler per message type and implement process().
    """

    def __init__(self):
        self.logger = get_logger(__name__)

        # Message type handlers and the record models they receive
        self._message_type_handlers: dict[str, Callable[..., Any]] = {}
        self._message_models: dict[str, type[BaseWebhookMessage]] = {}

    @abstractmethod
    def process(self, payload: Any) -> ApiResult[tuple[WebhookEvent, ...]]:
        """
        Normalize a decoded webhook delivery.

        Args:
            payload: The JSON-decoded request body

        Returns:
            ApiResult holding the events in record order, or a DecodeFailure
            when the delivery envelope is malformed
        """

    def process_raw(self, body: bytes | str) -> ApiResult[tuple[WebhookEvent, ...]]:
        """Decode a raw request body as JSON, then normalize it."""
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")

        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            self.logger.error(f"Webhook body is not valid JSON: {e}")
            return ApiResult.fail(
                DecodeFailure(message=f"Webhook body is not valid JSON: {e}", body=body)
            )

        return self.process(payload)

    def register_message_handler(
        self,
        message_type: str,
        handler: Callable[..., Any],
        model: type[BaseWebhookMessage] = BaseWebhookMessage,
    ) -> None:
        """
        Register a handler for a specific message type.

        Args:
            message_type: Value of the record's `type` field
            handler: Called with the parsed record and the common event fields
            model: Record model the raw message is validated into
        """
        self._message_type_handlers[message_type] = handler
        self._message_models[message_type] = model

    def get_message_model(self, message_type: str) -> type[BaseWebhookMessage]:
        """Get the record model for a specific message type."""
        return self._message_models.get(message_type, BaseWebhookMessage)

    def get_message_handler(self, message_type: str) -> Callable[..., Any] | None:
        """Get the handler for a specific message type."""
        return self._message_type_handlers.get(message_type)

    @property
    def supported_message_types(self) -> set[str]:
        return set(self._message_type_handlers)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message_types={sorted(self._message_type_handlers)})"
        )
