"""
WhatsApp media resource.

Endpoints:
- POST /PHONE_NUMBER_ID/media (upload)
- GET /MEDIA_ID (retrieve short-lived URL and metadata)
- DELETE /MEDIA_ID (delete)
"""

import mimetypes
from pathlib import Path

from wacloud.core.logging.logger import get_logger
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from wacloud.messaging.whatsapp.models.basic_models import SuccessResponse
from wacloud.messaging.whatsapp.models.error_models import ApiResult
from wacloud.messaging.whatsapp.models.media_models import (
    MediaUploadResponse,
    MediaUrlResponse,
)


class WhatsAppMediaHandler:
    """Uploads, looks up and deletes media through a WhatsAppClient."""

    def __init__(self, client: WhatsAppClient):
        self.client = client
        self.logger = get_logger(__name__).bind(tenant_id=client.phone_number_id)

    async def upload_media_from_bytes(
        self, data: bytes, filename: str, mime_type: str
    ) -> ApiResult[MediaUploadResponse]:
        """Upload raw bytes.

        Args:
            data: File content
            filename: Name reported to the API
            mime_type: MIME type of the content, e.g. "image/jpeg"
        """
        form = self.client.form_builder.build_form_data(
            {"messaging_product": "whatsapp", "type": mime_type},
            {"file": (filename, data, mime_type)},
        )
        self.logger.debug(f"Uploading {filename} ({mime_type}, {len(data)} bytes)")

        result = await self.client.execute(
            "POST", "media", MediaUploadResponse, form=form
        )
        if result.success:
            self.logger.info(f"Uploaded {filename} as media {result.value.id}")
        return result

    async def upload_media(
        self, file_path: str | Path, mime_type: str | None = None
    ) -> ApiResult[MediaUploadResponse]:
        """Upload a file from disk, guessing the MIME type from its name.

        Raises:
            ValueError: If the MIME type cannot be determined
            OSError: If the file cannot be read
        """
        path = Path(file_path)
        mime_type = mime_type or mimetypes.guess_type(path.name)[0]
        if not mime_type:
            raise ValueError(f"Cannot determine MIME type of {path.name}")
        return await self.upload_media_from_bytes(path.read_bytes(), path.name, mime_type)

    async def get_media_info(self, media_id: str) -> ApiResult[MediaUrlResponse]:
        """Retrieve the download URL and metadata of an uploaded media object."""
        return await self.client.get_request("", MediaUrlResponse, node_id=media_id)

    async def delete_media(self, media_id: str) -> ApiResult[SuccessResponse]:
        """Delete an uploaded media object."""
        result = await self.client.delete_request("", SuccessResponse, node_id=media_id)
        if result.success:
            self.logger.info(f"Deleted media {media_id}")
        return result
