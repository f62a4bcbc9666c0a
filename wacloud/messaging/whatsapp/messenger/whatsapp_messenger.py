"""
WhatsApp messages resource.

Thin helpers over the transport: each method assembles the request body for one
message kind and posts it to /{phone-number-id}/messages. Every method returns
the transport's ApiResult unchanged.
"""

from typing import Any

from wacloud.core.logging.logger import get_logger
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from wacloud.messaging.whatsapp.models.basic_models import (
    BasicTextMessage,
    MessageResponse,
    SuccessResponse,
)
from wacloud.messaging.whatsapp.models.error_models import ApiResult
from wacloud.messaging.whatsapp.models.interactive_models import (
    ButtonMessage,
    ListMessage,
)
from wacloud.messaging.whatsapp.models.media_models import MediaType


class WhatsAppMessenger:
    """
    Sends WhatsApp messages through a WhatsAppClient.

    Covers basic, media, interactive, template and specialized messages, plus
    read receipts.
    """

    def __init__(self, client: WhatsAppClient):
        """Initialize the messenger.

        Args:
            client: Configured WhatsApp client for API operations
        """
        self.client = client
        self.logger = get_logger(__name__).bind(tenant_id=client.phone_number_id)

    @staticmethod
    def _base_payload(
        recipient: str, message_type: str, reply_to_message_id: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": recipient,
            "type": message_type,
        }
        if reply_to_message_id:
            payload["context"] = {"message_id": reply_to_message_id}
        return payload

    async def _send(
        self, payload: dict[str, Any], operation: str
    ) -> ApiResult[MessageResponse]:
        recipient = payload.get("to")
        self.logger.debug(f"Sending {operation} to {recipient}")

        result = await self.client.post_request("messages", payload, MessageResponse)

        if result.success:
            self.logger.info(
                f"{operation.capitalize()} sent to {recipient}, id: {result.value.message_id}"
            )
        else:
            self.logger.error(f"Failed to send {operation} to {recipient}: {result.error}")
        return result

    # Basic messaging

    async def send_text(
        self,
        text: str,
        recipient: str,
        reply_to_message_id: str | None = None,
        preview_url: bool = False,
    ) -> ApiResult[MessageResponse]:
        """Send a text message.

        Args:
            text: Text content (1-4096 characters)
            recipient: Recipient phone number
            reply_to_message_id: Optional message ID to reply to
            preview_url: Render a preview for the first URL in the text
        """
        message = BasicTextMessage(
            text=text,
            recipient=recipient,
            reply_to_message_id=reply_to_message_id,
            preview_url=preview_url,
        )
        payload = self._base_payload(
            message.recipient, "text", message.reply_to_message_id
        )
        payload["text"] = {"body": message.text, "preview_url": message.preview_url}
        return await self._send(payload, "text message")

    async def send_reaction(
        self, recipient: str, message_id: str, emoji: str
    ) -> ApiResult[MessageResponse]:
        """React to a message. An empty emoji removes the reaction."""
        payload = self._base_payload(recipient, "reaction")
        payload["reaction"] = {"message_id": message_id, "emoji": emoji}
        return await self._send(payload, "reaction")

    async def remove_reaction(
        self, recipient: str, message_id: str
    ) -> ApiResult[MessageResponse]:
        """Remove a previously sent reaction."""
        return await self.send_reaction(recipient, message_id, "")

    async def mark_as_read(
        self, message_id: str, typing: bool = False
    ) -> ApiResult[SuccessResponse]:
        """Mark an inbound message as read, optionally showing a typing indicator.

        Args:
            message_id: WhatsApp message ID to mark as read
            typing: Show the typing indicator to the sender
        """
        payload: dict[str, Any] = {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": message_id,
        }
        if typing:
            payload["typing_indicator"] = {"type": "text"}

        result = await self.client.post_request("messages", payload, SuccessResponse)
        if result.success:
            self.logger.info(f"Message {message_id} marked as read")
        else:
            self.logger.error(f"Failed to mark {message_id} as read: {result.error}")
        return result

    # Media messaging

    async def send_media(
        self,
        media_type: MediaType | str,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
        caption: str | None = None,
        filename: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send a media message by uploaded media ID or by public link.

        Raises:
            ValueError: Unless exactly one of media_id and media_url is given,
                or when a caption is given for audio or sticker
        """
        media_type = MediaType(media_type)
        if bool(media_id) == bool(media_url):
            raise ValueError("Provide exactly one of media_id or media_url")
        if caption and media_type in (MediaType.AUDIO, MediaType.STICKER):
            raise ValueError(f"{media_type.value} messages do not support captions")

        media: dict[str, Any] = {"id": media_id} if media_id else {"link": media_url}
        if caption:
            media["caption"] = caption
        if filename and media_type == MediaType.DOCUMENT:
            media["filename"] = filename

        payload = self._base_payload(recipient, media_type.value, reply_to_message_id)
        payload[media_type.value] = media
        return await self._send(payload, f"{media_type.value} message")

    async def send_image(
        self,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
        caption: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        return await self.send_media(
            MediaType.IMAGE,
            recipient,
            media_id=media_id,
            media_url=media_url,
            caption=caption,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_video(
        self,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
        caption: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        return await self.send_media(
            MediaType.VIDEO,
            recipient,
            media_id=media_id,
            media_url=media_url,
            caption=caption,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_audio(
        self,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        return await self.send_media(
            MediaType.AUDIO,
            recipient,
            media_id=media_id,
            media_url=media_url,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_document(
        self,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
        caption: str | None = None,
        filename: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        return await self.send_media(
            MediaType.DOCUMENT,
            recipient,
            media_id=media_id,
            media_url=media_url,
            caption=caption,
            filename=filename,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_sticker(
        self,
        recipient: str,
        media_id: str | None = None,
        media_url: str | None = None,
    ) -> ApiResult[MessageResponse]:
        return await self.send_media(
            MediaType.STICKER, recipient, media_id=media_id, media_url=media_url
        )

    # Interactive messaging

    async def send_button_message(
        self,
        recipient: str,
        message: ButtonMessage,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send a message with up to three reply buttons."""
        payload = self._base_payload(recipient, "interactive", reply_to_message_id)
        payload["interactive"] = message.to_payload()
        return await self._send(payload, "button message")

    async def send_list_message(
        self,
        recipient: str,
        message: ListMessage,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send a list message."""
        payload = self._base_payload(recipient, "interactive", reply_to_message_id)
        payload["interactive"] = message.to_payload()
        return await self._send(payload, "list message")

    # Template messaging

    async def send_template(
        self,
        recipient: str,
        template_name: str,
        language_code: str = "en_US",
        components: list[dict[str, Any]] | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send an approved template.

        Args:
            recipient: Recipient phone number
            template_name: Name of the approved template
            language_code: Template language, e.g. "en_US"
            components: Header/body/button parameter components, passed as is
        """
        template: dict[str, Any] = {
            "name": template_name,
            "language": {"code": language_code},
        }
        if components:
            template["components"] = components

        payload = self._base_payload(recipient, "template")
        payload["template"] = template
        return await self._send(payload, "template message")

    # Specialized messaging

    async def send_location(
        self,
        recipient: str,
        latitude: float,
        longitude: float,
        name: str | None = None,
        address: str | None = None,
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send a location pin."""
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise ValueError("Latitude must be within ±90 and longitude within ±180")

        location: dict[str, Any] = {"latitude": latitude, "longitude": longitude}
        if name:
            location["name"] = name
        if address:
            location["address"] = address

        payload = self._base_payload(recipient, "location", reply_to_message_id)
        payload["location"] = location
        return await self._send(payload, "location message")

    async def send_contacts(
        self,
        recipient: str,
        contacts: list[dict[str, Any]],
        reply_to_message_id: str | None = None,
    ) -> ApiResult[MessageResponse]:
        """Send one or more contact cards.

        Args:
            recipient: Recipient phone number
            contacts: Contact objects as defined by the Cloud API, each with at
                least a "name" containing "formatted_name"
        """
        if not contacts:
            raise ValueError("At least one contact is required")

        payload = self._base_payload(recipient, "contacts", reply_to_message_id)
        payload["contacts"] = contacts
        return await self._send(payload, "contacts message")
