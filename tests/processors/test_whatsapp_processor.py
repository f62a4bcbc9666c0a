"""
Tests for webhook normalization.

Covers ordering and totality of the produced events, every message type,
status transitions, value-level errors and malformed deliveries.
"""

import json
from decimal import Decimal

import pytest

from wacloud.messaging.whatsapp.models.error_models import DecodeFailure
from wacloud.processors.whatsapp_processor import (
    WhatsAppWebhookProcessor,
    verify_subscription,
)
from wacloud.webhooks.core.base_message import BaseWebhookMessage
from wacloud.webhooks.core.types import RecordKind
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
)
from wacloud.webhooks.whatsapp.message_types import MESSAGE_MODELS, TextContent

WABA_ID = "102290129340398"
PHONE_ID = "106540352242922"


@pytest.fixture
def processor() -> WhatsAppWebhookProcessor:
    return WhatsAppWebhookProcessor(emit_sent_status=True)


def events_of(processor, payload):
    result = processor.process(payload)
    assert result.success, result.error
    return result.value


class TestEmptyAndOrdering:
    def test_empty_entry_list_yields_no_events(self, processor):
        assert events_of(processor, {"object": "whatsapp_business_account", "entry": []}) == ()

    def test_value_without_records_yields_no_events(self, processor, payload_builder):
        assert events_of(processor, payload_builder()) == ()

    def test_non_message_field_is_tolerated(self, processor):
        payload = {
            "object": "whatsapp_business_account",
            "entry": [
                {
                    "id": WABA_ID,
                    "changes": [
                        {
                            "field": "account_update",
                            "value": {"phone_number": "15550783881", "event": "VERIFIED_ACCOUNT"},
                        }
                    ],
                }
            ],
        }

        assert events_of(processor, payload) == ()

    def test_groups_in_order_messages_statuses_errors(
        self, processor, payload_builder, message_builder, status_builder
    ):
        payload = payload_builder(
            messages=[
                message_builder("text", {"body": "one"}, message_id="wamid.1"),
                message_builder("text", {"body": "two"}, message_id="wamid.2"),
            ],
            statuses=[status_builder("delivered"), status_builder("read")],
            errors=[{"code": 131000, "title": "Something went wrong"}],
        )

        events = events_of(processor, payload)

        assert [event.event_type for event in events] == [
            "text_message",
            "text_message",
            "message_delivered",
            "message_read",
            "webhook_error",
        ]
        assert [events[0].body, events[1].body] == ["one", "two"]

    def test_count_and_order_follow_records_across_entries(
        self, processor, payload_builder, message_builder, status_builder
    ):
        first = payload_builder(messages=[message_builder("text", {"body": "a"})])
        second = payload_builder(
            statuses=[status_builder("sent"), status_builder("failed")],
            waba_id="other-waba",
            phone_number_id="other-phone",
        )
        payload = {"object": "whatsapp_business_account", "entry": first["entry"] + second["entry"]}

        events = events_of(processor, payload)

        assert len(events) == 3
        assert [e.event_type for e in events] == ["text_message", "message_sent", "message_failed"]
        assert events[0].waba_id == WABA_ID
        assert events[1].waba_id == "other-waba"
        assert events[2].phone_number_id == "other-phone"

    def test_result_is_restartable(self, processor, payload_builder, message_builder):
        events = events_of(processor, payload_builder(messages=[message_builder("text", {"body": "x"})]))

        assert list(events) == list(events)

    def test_process_raw_accepts_bytes(self, processor, payload_builder, message_builder):
        body = json.dumps(payload_builder(messages=[message_builder("text", {"body": "hi"})]))

        result = processor.process_raw(body.encode())

        assert result.success
        assert result.value[0].body == "hi"


class TestMessageTypes:
    def test_text_scenario(self, processor, payload_builder, message_builder):
        payload = payload_builder(
            contacts=[{"profile": {"name": "Kerry Fisher"}, "wa_id": "16505551234"}],
            messages=[
                message_builder(
                    "text",
                    {"body": "Hello, World!"},
                    context={"from": "15550783881", "id": "wamid.ORIGINAL"},
                )
            ],
        )

        (event,) = events_of(processor, payload)

        assert isinstance(event, TextMessageEvent)
        assert event.body == "Hello, World!"
        assert event.sender == "16505551234"
        assert event.sender_name == "Kerry Fisher"
        assert event.timestamp == 1749416383
        assert event.waba_id == WABA_ID
        assert event.phone_number_id == PHONE_ID
        assert event.is_reply
        assert event.context.id == "wamid.ORIGINAL"

    @pytest.mark.parametrize(
        "message_type, event_cls",
        [
            ("image", ImageMessageEvent),
            ("video", VideoMessageEvent),
            ("audio", AudioMessageEvent),
            ("document", DocumentMessageEvent),
            ("sticker", StickerMessageEvent),
        ],
    )
    def test_media_messages(self, processor, payload_builder, message_builder, message_type, event_cls):
        media = {"id": "1013859600285441", "mime_type": "image/jpeg", "sha256": "abc", "caption": "cap"}

        (event,) = events_of(processor, payload_builder(messages=[message_builder(message_type, media)]))

        assert isinstance(event, event_cls)
        assert event.media.id == "1013859600285441"
        assert event.media.mime_type == "image/jpeg"

    def test_location(self, processor, payload_builder, message_builder):
        location = {"latitude": 37.4847, "longitude": -122.1477, "name": "HQ", "address": "1 Hacker Way"}

        (event,) = events_of(processor, payload_builder(messages=[message_builder("location", location)]))

        assert isinstance(event, LocationMessageEvent)
        assert event.location.name == "HQ"
        assert event.location.latitude == pytest.approx(37.4847)

    def test_contacts(self, processor, payload_builder, message_builder):
        contacts = [
            {
                "name": {"formatted_name": "Ana Pérez", "first_name": "Ana"},
                "phones": [{"phone": "+1 650 555 1234", "type": "CELL", "wa_id": "16505551234"}],
            }
        ]

        (event,) = events_of(processor, payload_builder(messages=[message_builder("contacts", contacts)]))

        assert isinstance(event, ContactsMessageEvent)
        assert event.contacts[0].name.formatted_name == "Ana Pérez"
        assert event.contacts[0].whatsapp_ids == ["16505551234"]

    def test_reaction_and_removed_reaction(self, processor, payload_builder, message_builder):
        payload = payload_builder(
            messages=[
                message_builder("reaction", {"message_id": "wamid.ORIGINAL", "emoji": "❤️"}),
                message_builder("reaction", {"message_id": "wamid.ORIGINAL"}),
            ]
        )

        added, removed = events_of(processor, payload)

        assert isinstance(added, ReactionEvent)
        assert added.reacted_message_id == "wamid.ORIGINAL"
        assert added.emoji == "❤️"
        assert removed.is_removal

    def test_interactive_button_reply(self, processor, payload_builder, message_builder):
        interactive = {"type": "button_reply", "button_reply": {"id": "yes", "title": "Yes"}}

        (event,) = events_of(processor, payload_builder(messages=[message_builder("interactive", interactive)]))

        assert isinstance(event, ButtonReplyEvent)
        assert (event.button_id, event.title) == ("yes", "Yes")

    def test_interactive_list_reply(self, processor, payload_builder, message_builder):
        interactive = {
            "type": "list_reply",
            "list_reply": {"id": "basic", "title": "Basic", "description": "1 seat"},
        }

        (event,) = events_of(processor, payload_builder(messages=[message_builder("interactive", interactive)]))

        assert isinstance(event, ListReplyEvent)
        assert (event.row_id, event.title, event.description) == ("basic", "Basic", "1 seat")

    @pytest.mark.parametrize(
        "interactive",
        [
            {"type": "nfm_reply", "nfm_reply": {"response_json": "{}"}},
            {"type": "button_reply"},
            {"type": "list_reply", "button_reply": {"id": "x", "title": "X"}},
        ],
    )
    def test_interactive_without_matching_reply_is_unknown(
        self, processor, payload_builder, message_builder, interactive
    ):
        (event,) = events_of(processor, payload_builder(messages=[message_builder("interactive", interactive)]))

        assert isinstance(event, UnknownEvent)
        assert event.raw_type == "interactive"
        assert event.record_kind == RecordKind.MESSAGE

    def test_template_quick_reply_button(self, processor, payload_builder, message_builder):
        button = {"payload": "STOP_PROMOTIONS", "text": "Stop promotions"}

        (event,) = events_of(processor, payload_builder(messages=[message_builder("button", button)]))

        assert isinstance(event, ButtonReplyEvent)
        assert event.button_id == "STOP_PROMOTIONS"
        assert event.title == "Stop promotions"

    def test_order(self, processor, payload_builder, message_builder):
        order = {
            "catalog_id": "catalog-1",
            "text": "Please deliver fast",
            "product_items": [
                {"product_retailer_id": "sku-1", "quantity": 2, "item_price": 10.5, "currency": "USD"},
                {"product_retailer_id": "sku-2", "quantity": 1, "item_price": 4, "currency": "USD"},
            ],
        }

        (event,) = events_of(processor, payload_builder(messages=[message_builder("order", order)]))

        assert isinstance(event, OrderMessageEvent)
        assert event.order.total_amount == Decimal("25")

    def test_system(self, processor, payload_builder, message_builder):
        system = {
            "body": "User A changed from 16505551234 to 16505559999",
            "type": "user_changed_number",
            "wa_id": "16505559999",
        }

        (event,) = events_of(processor, payload_builder(messages=[message_builder("system", system)]))

        assert isinstance(event, SystemMessageEvent)
        assert event.system.type == "user_changed_number"

    def test_every_registered_type_has_a_model(self, processor):
        assert processor.supported_message_types == {str(t.value) for t in MESSAGE_MODELS}


class TestUnknownRecords:
    def test_unknown_type_carries_discriminant_and_record(self, processor, payload_builder, message_builder):
        record = message_builder("ephemeral", {"whatever": 1})

        (event,) = events_of(processor, payload_builder(messages=[record]))

        assert isinstance(event, UnknownEvent)
        assert event.raw_type == "ephemeral"
        assert event.raw == record
        assert event.phone_number_id == PHONE_ID

    def test_missing_type_is_unknown(self, processor, payload_builder):
        (event,) = events_of(processor, payload_builder(messages=[{"from": "1", "id": "wamid.1"}]))

        assert isinstance(event, UnknownEvent)
        assert event.raw_type is None

    def test_missing_content_is_unknown_not_failure(self, processor, payload_builder, message_builder):
        (event,) = events_of(processor, payload_builder(messages=[message_builder("text")]))

        assert isinstance(event, UnknownEvent)
        assert event.raw_type == "text"

    def test_non_object_records_are_unknown(self, processor, payload_builder):
        payload = payload_builder(messages=["junk"], statuses=[42], errors=[None])

        events = events_of(processor, payload)

        assert [e.record_kind for e in events] == [RecordKind.MESSAGE, RecordKind.STATUS, RecordKind.ERROR]
        assert all(isinstance(e, UnknownEvent) for e in events)

    def test_one_bad_record_does_not_hide_the_others(self, processor, payload_builder, message_builder):
        payload = payload_builder(
            messages=[
                message_builder("text", {"body": "before"}),
                message_builder("location", {"latitude": "north"}),
                message_builder("text", {"body": "after"}),
            ]
        )

        events = events_of(processor, payload)

        assert [e.event_type for e in events] == ["text_message", "unknown", "text_message"]


class TestCustomMessageHandlers:
    def test_handler_for_unlisted_type_receives_base_record(
        self, processor, payload_builder, message_builder
    ):
        def create_ephemeral_event(message, fields):
            return TextMessageEvent(**fields, body=message.model_extra["ephemeral"]["text"])

        processor.register_message_handler("ephemeral", create_ephemeral_event)
        record = message_builder("ephemeral", {"text": "gone soon"})

        (event,) = events_of(processor, payload_builder(messages=[record]))

        assert isinstance(event, TextMessageEvent)
        assert event.body == "gone soon"
        assert event.sender == "16505551234"
        assert "ephemeral" in processor.supported_message_types

    def test_handler_with_record_model(self, processor, payload_builder, message_builder):
        class NoteMessage(BaseWebhookMessage):
            note: TextContent

        processor.register_message_handler(
            "note",
            lambda message, fields: TextMessageEvent(**fields, body=message.note.body),
            NoteMessage,
        )
        good = message_builder("note", {"body": "hi"})
        bad = message_builder("note")

        events = events_of(processor, payload_builder(messages=[good, bad]))

        assert [e.event_type for e in events] == ["text_message", "unknown"]
        assert events[1].raw_type == "note"

    def test_handler_building_an_invalid_event_yields_unknown(
        self, processor, payload_builder, message_builder
    ):
        processor.register_message_handler(
            "ephemeral", lambda message, fields: TextMessageEvent(**fields)
        )

        (event,) = events_of(
            processor, payload_builder(messages=[message_builder("ephemeral", {})])
        )

        assert isinstance(event, UnknownEvent)
        assert event.raw_type == "ephemeral"


class TestStatuses:
    def test_failed_status_scenario(self, processor, payload_builder, status_builder):
        status = status_builder(
            "failed",
            errors=[
                {
                    "code": 131047,
                    "title": "Re-engagement message",
                    "message": "Re-engagement message",
                    "error_data": {
                        "details": "Message failed to send because more than 24 hours have passed"
                    },
                },
                {"code": 131026, "title": "Message undeliverable"},
            ],
        )

        (event,) = events_of(processor, payload_builder(statuses=[status]))

        assert isinstance(event, MessageFailedEvent)
        assert event.error_code == 131047
        assert event.error_title == "Re-engagement message"
        assert event.error_details.startswith("Message failed to send")
        assert len(event.errors) == 2
        assert event.recipient_id == "16505551234"

    def test_failed_status_without_errors(self, processor, payload_builder, status_builder):
        (event,) = events_of(processor, payload_builder(statuses=[status_builder("failed")]))

        assert isinstance(event, MessageFailedEvent)
        assert event.error_code is None
        assert event.errors == ()

    def test_failed_status_with_null_errors(self, processor, payload_builder, status_builder):
        (event,) = events_of(
            processor, payload_builder(statuses=[status_builder("failed", errors=None)])
        )

        assert isinstance(event, MessageFailedEvent)
        assert event.errors == ()

    def test_failed_status_with_single_error_object(
        self, processor, payload_builder, status_builder
    ):
        status = status_builder("failed", errors={"code": 131026, "title": "Message undeliverable"})

        (event,) = events_of(processor, payload_builder(statuses=[status]))

        assert isinstance(event, MessageFailedEvent)
        assert event.error_code == 131026

    def test_status_with_pricing_and_conversation(self, processor, payload_builder, status_builder):
        status = status_builder(
            "sent",
            conversation={
                "id": "CONVERSATION_ID",
                "expiration_timestamp": 1749502800,
                "origin": {"type": "utility"},
            },
            pricing={"billable": True, "pricing_model": "PMP", "category": "utility", "type": "regular"},
        )

        (event,) = events_of(processor, payload_builder(statuses=[status]))

        assert isinstance(event, MessageSentEvent)
        assert event.conversation.id == "CONVERSATION_ID"
        assert event.conversation.expiration_timestamp == "1749502800"
        assert event.pricing.category == "utility"

    @pytest.mark.parametrize(
        "state, event_cls",
        [("sent", MessageSentEvent), ("delivered", MessageDeliveredEvent), ("read", MessageReadEvent)],
    )
    def test_status_states(self, processor, payload_builder, status_builder, state, event_cls):
        (event,) = events_of(processor, payload_builder(statuses=[status_builder(state)]))

        assert isinstance(event, event_cls)

    def test_unknown_state(self, processor, payload_builder, status_builder):
        (event,) = events_of(processor, payload_builder(statuses=[status_builder("deleted")]))

        assert isinstance(event, UnknownEvent)
        assert event.record_kind == RecordKind.STATUS
        assert event.raw_type == "deleted"

    def test_sent_status_can_be_dropped(self, payload_builder, status_builder):
        processor = WhatsAppWebhookProcessor(emit_sent_status=False)
        payload = payload_builder(statuses=[status_builder("sent"), status_builder("delivered")])

        events = events_of(processor, payload)

        assert [e.event_type for e in events] == ["message_delivered"]


class TestWebhookErrors:
    def test_value_level_error(self, processor, payload_builder):
        error = {
            "code": 130429,
            "title": "Rate limit hit",
            "message": "Rate limit hit",
            "error_data": {"details": "Message failed to send because there were too many messages"},
        }

        (event,) = events_of(processor, payload_builder(errors=[error]))

        assert isinstance(event, WebhookErrorEvent)
        assert event.code == 130429
        assert event.details.startswith("Message failed")


class TestMalformedDeliveries:
    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "entry",
            None,
            {"object": "whatsapp_business_account"},
            {"entry": "not-a-list"},
            {"entry": [{"id": WABA_ID}]},
            {"entry": [{"id": WABA_ID, "changes": [{"field": "messages"}]}]},
            {"entry": [{"id": WABA_ID, "changes": [{"field": "messages", "value": []}]}]},
        ],
    )
    def test_malformed_envelope_is_decode_failure(self, processor, payload):
        result = processor.process(payload)

        assert not result.success
        assert isinstance(result.error, DecodeFailure)

    def test_invalid_json_is_decode_failure(self, processor):
        result = processor.process_raw(b"{not json")

        assert isinstance(result.error, DecodeFailure)
        assert result.error.body == "{not json"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "message_type, content",
        [
            ("text", {"body": "Hello"}),
            ("image", {"id": "1", "mime_type": "image/jpeg", "caption": "cap"}),
            ("location", {"latitude": 1.5, "longitude": 2.5}),
            ("reaction", {"message_id": "wamid.X", "emoji": "👍"}),
            ("interactive", {"type": "list_reply", "list_reply": {"id": "r", "title": "R"}}),
            ("button", {"payload": "P", "text": "T"}),
            (
                "order",
                {
                    "catalog_id": "c",
                    "product_items": [
                        {"product_retailer_id": "s", "quantity": 1, "item_price": "9.99", "currency": "EUR"}
                    ],
                },
            ),
        ],
    )
    def test_reencoded_record_yields_equal_event(
        self, processor, payload_builder, message_builder, message_type, content
    ):
        record = message_builder(message_type, content, context={"forwarded": True})
        (first,) = events_of(processor, payload_builder(messages=[record]))

        model = MESSAGE_MODELS[message_type].model_validate(record)
        (second,) = events_of(processor, payload_builder(messages=[model.to_record()]))

        assert first == second


class TestVerifySubscription:
    def test_returns_challenge_for_matching_token(self):
        assert verify_subscription("subscribe", "secret", "1158201444", "secret") == "1158201444"

    @pytest.mark.parametrize(
        "mode, token", [("subscribe", "wrong"), ("unsubscribe", "secret"), (None, None)]
    )
    def test_rejects_bad_handshakes(self, mode, token):
        assert verify_subscription(mode, token, "1158201444", "secret") is None

    def test_uses_configured_token_by_default(self, monkeypatch):
        from wacloud.core.config.settings import settings

        monkeypatch.setattr(settings, "whatsapp_webhook_verify_token", "from-env")

        assert verify_subscription("subscribe", "from-env", "42") == "42"
