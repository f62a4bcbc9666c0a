"""
WhatsApp webhook processor.

Walks a WhatsApp Business webhook delivery and produces one event per record:
for every entry and change in order, first the messages, then the statuses,
then the value-level errors. Records that cannot be interpreted become
UnknownEvent instead of failing the delivery; only a malformed envelope is a
DecodeFailure.
"""

import hmac
import json
from typing import Any

from pydantic import ValidationError

from wacloud.core.config.settings import settings
from wacloud.core.logging.logger import get_logger, get_webhook_logger
from wacloud.messaging.whatsapp.models.error_models import ApiResult, DecodeFailure
from wacloud.processors.base_processor import BaseWebhookProcessor
from wacloud.webhooks.core.types import MessageStatus, MessageType, RecordKind
from wacloud.webhooks.events import (
    AudioMessageEvent,
    ButtonReplyEvent,
    ContactsMessageEvent,
    DocumentMessageEvent,
    ImageMessageEvent,
    ListReplyEvent,
    LocationMessageEvent,
    MessageDeliveredEvent,
    MessageFailedEvent,
    MessageReadEvent,
    MessageSentEvent,
    OrderMessageEvent,
    ReactionEvent,
    StickerMessageEvent,
    SystemMessageEvent,
    TextMessageEvent,
    UnknownEvent,
    VideoMessageEvent,
    WebhookErrorEvent,
    WebhookEvent,
)
from wacloud.webhooks.whatsapp.base_models import MessageError, sender_names
from wacloud.webhooks.whatsapp.message_types import (
    MESSAGE_MODELS,
    ButtonReply,
    ListReply,
    WhatsAppAudioMessage,
    WhatsAppButtonMessage,
    WhatsAppContactMessage,
    WhatsAppDocumentMessage,
    WhatsAppImageMessage,
    WhatsAppInteractiveMessage,
    WhatsAppLocationMessage,
    WhatsAppOrderMessage,
    WhatsAppReactionMessage,
    WhatsAppStickerMessage,
    WhatsAppSystemMessage,
    WhatsAppTextMessage,
    WhatsAppVideoMessage,
)
from wacloud.webhooks.whatsapp.status_models import WhatsAppMessageStatus
from wacloud.webhooks.whatsapp.webhook_container import WebhookValue, WhatsAppWebhook

logger = get_logger(__name__)


def verify_subscription(
    mode: str | None,
    token: str | None,
    challenge: str | None,
    expected_token: str | None = None,
) -> str | None:
    """
    Answer the webhook subscription handshake (GET hub.mode/hub.verify_token).

    Args:
        mode: Value of hub.mode
        token: Value of hub.verify_token
        challenge: Value of hub.challenge
        expected_token: Configured verify token; defaults to the
            WHATSAPP_WEBHOOK_VERIFY_TOKEN setting

    Returns:
        The challenge to echo back when the subscription is valid, else None
    """
    expected = expected_token or settings.whatsapp_webhook_verify_token
    if not expected:
        logger.warning("Webhook verify token not configured - rejecting subscription")
        return None

    if mode == "subscribe" and token and hmac.compare_digest(
        token.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.info("✅ Webhook subscription verified")
        return challenge

    logger.warning(f"Webhook verification failed (mode={mode!r})")
    return None


class WhatsAppWebhookProcessor(BaseWebhookProcessor):
    """
    WhatsApp Business Platform webhook processor.

    Example:
        processor = WhatsAppWebhookProcessor()
        result = processor.process_raw(request_body)
        if result.success:
            for event in result.value:
                await handle(event)
    """

    def __init__(self, emit_sent_status: bool | None = None):
        """
        Args:
            emit_sent_status: Emit MessageSentEvent for "sent" statuses; None
                uses the EMIT_SENT_STATUS setting
        """
        super().__init__()
        self.emit_sent_status = (
            settings.emit_sent_status if emit_sent_status is None else emit_sent_status
        )
        self._register_message_handlers()

    def _register_message_handlers(self) -> None:
        """Register handlers for all supported WhatsApp message types."""
        handlers = {
            MessageType.TEXT: self._create_text_event,
            MessageType.IMAGE: self._create_image_event,
            MessageType.VIDEO: self._create_video_event,
            MessageType.AUDIO: self._create_audio_event,
            MessageType.DOCUMENT: self._create_document_event,
            MessageType.STICKER: self._create_sticker_event,
            MessageType.LOCATION: self._create_location_event,
            MessageType.CONTACTS: self._create_contacts_event,
            MessageType.REACTION: self._create_reaction_event,
            MessageType.INTERACTIVE: self._create_interactive_event,
            MessageType.BUTTON: self._create_button_event,
            MessageType.ORDER: self._create_order_event,
            MessageType.SYSTEM: self._create_system_event,
        }
        for message_type, handler in handlers.items():
            self.register_message_handler(
                message_type, handler, MESSAGE_MODELS[message_type]
            )

    def parse_webhook_container(self, payload: dict[str, Any]) -> WhatsAppWebhook:
        """
        Parse the delivery envelope.

        Raises:
            ValidationError: If the envelope is malformed
        """
        return WhatsAppWebhook.model_validate(payload)

    def process(self, payload: Any) -> ApiResult[tuple[WebhookEvent, ...]]:
        if not isinstance(payload, dict):
            self.logger.error(
                f"Webhook payload must be a JSON object, got {type(payload).__name__}"
            )
            return ApiResult.fail(
                DecodeFailure(
                    message=f"Webhook payload must be a JSON object, got {type(payload).__name__}",
                    body=json.dumps(payload, default=str),
                )
            )

        try:
            webhook = self.parse_webhook_container(payload)
        except ValidationError as e:
            self.logger.error(f"Failed to parse WhatsApp webhook structure: {e}")
            return ApiResult.fail(
                DecodeFailure(
                    message=f"Malformed webhook envelope: {e}",
                    body=json.dumps(payload, default=str),
                )
            )

        events: list[WebhookEvent] = []
        for entry in webhook.entry:
            for change in entry.changes:
                events.extend(self._process_value(entry.id, change.value))

        self.logger.debug(
            f"📨 Webhook normalized: {webhook.record_count} record(s), {len(events)} event(s)"
        )
        return ApiResult.ok(tuple(events))

    def _process_value(self, waba_id: str, value: WebhookValue) -> list[WebhookEvent]:
        if value.is_empty:
            return []

        envelope = {
            "waba_id": waba_id,
            "phone_number_id": value.metadata.phone_number_id,
        }
        names = sender_names(value.contacts)

        events: list[WebhookEvent] = [
            self.create_message_event(raw, envelope, names) for raw in value.messages
        ]
        for raw in value.statuses:
            event = self.create_status_event(raw, envelope)
            if event is not None:
                events.append(event)
        events.extend(self.create_error_event(raw, envelope) for raw in value.errors)
        return events

    # ===== Messages =====

    def create_message_event(
        self,
        raw: Any,
        envelope: dict[str, str],
        names: dict[str, str] | None = None,
    ) -> WebhookEvent:
        """
        Create the event for one message record.

        Args:
            raw: Message record as received
            envelope: waba_id and phone_number_id of the change
            names: Sender profile names keyed by wa_id
        """
        if not isinstance(raw, dict):
            return self._unknown(
                RecordKind.MESSAGE, raw, envelope, reason="Message record is not an object"
            )

        raw_type = raw.get("type")
        if not isinstance(raw_type, str):
            return self._unknown(
                RecordKind.MESSAGE, raw, envelope, reason="Message type is missing"
            )

        handler = self.get_message_handler(raw_type)
        if handler is None:
            return self._unknown(
                RecordKind.MESSAGE,
                raw,
                envelope,
                raw_type=raw_type,
                reason=f"Unsupported message type '{raw_type}'",
            )

        try:
            message = self.get_message_model(raw_type).model_validate(raw)
        except ValidationError as e:
            return self._unknown(
                RecordKind.MESSAGE,
                raw,
                envelope,
                raw_type=raw_type,
                reason=f"Invalid {raw_type} message: {e.error_count()} validation error(s)",
            )

        fields = {
            **envelope,
            **message.common_event_fields(),
            "sender_name": (names or {}).get(message.sender),
        }
        try:
            event = handler(message, fields)
        except ValidationError as e:
            return self._unknown(
                RecordKind.MESSAGE,
                raw,
                envelope,
                raw_type=raw_type,
                reason=f"Could not build event for {raw_type} message: {e.error_count()} validation error(s)",
            )
        if event is None:
            return self._unknown(
                RecordKind.MESSAGE,
                raw,
                envelope,
                raw_type=raw_type,
                reason=f"No reply data in {raw_type} message",
            )

        get_webhook_logger(__name__, envelope["phone_number_id"], message.sender).debug(
            f"Message {message.id} -> {event.event_type}"
        )
        return event

    # Message creation handlers for all WhatsApp message types

    def _create_text_event(
        self, message: WhatsAppTextMessage, fields: dict[str, Any]
    ) -> TextMessageEvent:
        return TextMessageEvent(**fields, body=message.text.body)

    def _create_image_event(
        self, message: WhatsAppImageMessage, fields: dict[str, Any]
    ) -> ImageMessageEvent:
        return ImageMessageEvent(**fields, media=message.image)

    def _create_video_event(
        self, message: WhatsAppVideoMessage, fields: dict[str, Any]
    ) -> VideoMessageEvent:
        return VideoMessageEvent(**fields, media=message.video)

    def _create_audio_event(
        self, message: WhatsAppAudioMessage, fields: dict[str, Any]
    ) -> AudioMessageEvent:
        return AudioMessageEvent(**fields, media=message.audio)

    def _create_document_event(
        self, message: WhatsAppDocumentMessage, fields: dict[str, Any]
    ) -> DocumentMessageEvent:
        return DocumentMessageEvent(**fields, media=message.document)

    def _create_sticker_event(
        self, message: WhatsAppStickerMessage, fields: dict[str, Any]
    ) -> StickerMessageEvent:
        return StickerMessageEvent(**fields, media=message.sticker)

    def _create_location_event(
        self, message: WhatsAppLocationMessage, fields: dict[str, Any]
    ) -> LocationMessageEvent:
        return LocationMessageEvent(**fields, location=message.location)

    def _create_contacts_event(
        self, message: WhatsAppContactMessage, fields: dict[str, Any]
    ) -> ContactsMessageEvent:
        return ContactsMessageEvent(**fields, contacts=message.contacts)

    def _create_reaction_event(
        self, message: WhatsAppReactionMessage, fields: dict[str, Any]
    ) -> ReactionEvent:
        return ReactionEvent(
            **fields,
            reacted_message_id=message.reaction.message_id,
            emoji=message.reaction.emoji or None,
        )

    def _create_interactive_event(
        self, message: WhatsAppInteractiveMessage, fields: dict[str, Any]
    ) -> ButtonReplyEvent | ListReplyEvent | None:
        reply = message.interactive.reply
        if isinstance(reply, ButtonReply):
            return ButtonReplyEvent(**fields, button_id=reply.id, title=reply.title)
        if isinstance(reply, ListReply):
            return ListReplyEvent(
                **fields,
                row_id=reply.id,
                title=reply.title,
                description=reply.description,
            )
        # nfm_reply (flows) and any future subtype
        return None

    def _create_button_event(
        self, message: WhatsAppButtonMessage, fields: dict[str, Any]
    ) -> ButtonReplyEvent:
        return ButtonReplyEvent(
            **fields, button_id=message.button.payload, title=message.button.text
        )

    def _create_order_event(
        self, message: WhatsAppOrderMessage, fields: dict[str, Any]
    ) -> OrderMessageEvent:
        return OrderMessageEvent(**fields, order=message.order)

    def _create_system_event(
        self, message: WhatsAppSystemMessage, fields: dict[str, Any]
    ) -> SystemMessageEvent:
        return SystemMessageEvent(**fields, system=message.system)

    # ===== Statuses =====

    def create_status_event(
        self, raw: Any, envelope: dict[str, str]
    ) -> WebhookEvent | None:
        """
        Create the event for one status record.

        Returns None only for "sent" statuses when emit_sent_status is off.
        """
        if not isinstance(raw, dict):
            return self._unknown(
                RecordKind.STATUS, raw, envelope, reason="Status record is not an object"
            )

        raw_status = raw.get("status")
        raw_type = raw_status if isinstance(raw_status, str) else None
        try:
            status = WhatsAppMessageStatus.model_validate(raw)
        except ValidationError as e:
            return self._unknown(
                RecordKind.STATUS,
                raw,
                envelope,
                raw_type=raw_type,
                reason=f"Invalid status: {e.error_count()} validation error(s)",
            )

        fields = {
            **envelope,
            "message_id": status.id,
            "recipient_id": status.recipient_id,
            "timestamp": status.timestamp,
            "conversation": status.conversation,
            "pricing": status.pricing,
            "biz_opaque_callback_data": status.biz_opaque_callback_data,
        }

        match status.status:
            case MessageStatus.SENT.value:
                if not self.emit_sent_status:
                    self.logger.debug(f"Skipping sent status for {status.id}")
                    return None
                return MessageSentEvent(**fields)
            case MessageStatus.DELIVERED.value:
                return MessageDeliveredEvent(**fields)
            case MessageStatus.READ.value:
                return MessageReadEvent(**fields)
            case MessageStatus.FAILED.value:
                return self._create_failed_event(status, fields)
            case _:
                return self._unknown(
                    RecordKind.STATUS,
                    raw,
                    envelope,
                    raw_type=status.status,
                    reason=f"Unsupported status '{status.status}'",
                )

    def _create_failed_event(
        self, status: WhatsAppMessageStatus, fields: dict[str, Any]
    ) -> MessageFailedEvent:
        first = status.first_error
        if first is None:
            self.logger.warning(f"Failed status for {status.id} carries no error details")
        else:
            self.logger.debug(
                f"Message {status.id} failed with code {first.code}: {first.title}"
            )

        return MessageFailedEvent(
            **fields,
            error_code=first.code if first else None,
            error_title=first.title if first else None,
            error_message=first.message if first else None,
            error_details=first.details if first else None,
            errors=status.errors,
        )

    # ===== Errors =====

    def create_error_event(self, raw: Any, envelope: dict[str, str]) -> WebhookEvent:
        """Create the event for one value-level error record."""
        try:
            error = MessageError.model_validate(raw)
        except ValidationError as e:
            return self._unknown(
                RecordKind.ERROR,
                raw,
                envelope,
                reason=f"Invalid error record: {e.error_count()} validation error(s)",
            )

        self.logger.warning(f"Webhook error {error.code}: {error.title or error.message}")
        return WebhookErrorEvent(
            **envelope,
            code=error.code,
            title=error.title,
            message=error.message,
            details=error.details,
        )

    def _unknown(
        self,
        kind: RecordKind,
        raw: Any,
        envelope: dict[str, str],
        raw_type: str | None = None,
        reason: str | None = None,
    ) -> UnknownEvent:
        self.logger.debug(f"Unknown {kind.value} record: {reason}")
        return UnknownEvent(
            **envelope, record_kind=kind, raw_type=raw_type, raw=raw, reason=reason
        )
