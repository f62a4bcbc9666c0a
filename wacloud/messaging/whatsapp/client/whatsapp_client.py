"""
WhatsApp Cloud API transport.

Key Design Decisions:
- One authenticated pipeline shared by every resource module
- Pure dependency injection: the aiohttp session is owned by the caller
- Failures are returned as ApiResult values, never raised
- No retries and no caching; retry policy belongs to the caller
"""

import asyncio
import json
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from wacloud.core.config.client_config import ClientConfig
from wacloud.core.logging.logger import ContextLogger, get_logger
from wacloud.messaging.whatsapp.models.error_models import (
    ApiResult,
    AuthenticationFailed,
    BaseApiError,
    DecodeFailure,
    RateLimited,
    TransportFailure,
)
from wacloud.messaging.whatsapp.utils.error_helpers import (
    classify_error,
    parse_error_envelope,
    parse_retry_after,
)

T = TypeVar("T")

# Longest body excerpt kept in log lines
_LOG_BODY_LIMIT = 500


class WhatsAppUrlBuilder:
    """Builds URLs for Graph API endpoints."""

    def __init__(self, base_url: str, api_version: str, phone_number_id: str):
        """Initialize URL builder with configuration.

        Args:
            base_url: Graph API base URL
            api_version: Graph API version, e.g. "v21.0"
            phone_number_id: WhatsApp Business phone number ID
        """
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.phone_number_id = phone_number_id

    def get_node_url(self, node_id: str, path: str = "") -> str:
        """Build `{base}/{version}/{node}/{path}`; an empty path targets the node."""
        url = f"{self.base_url}/{self.api_version}/{node_id.strip('/')}"
        path = path.strip("/")
        return f"{url}/{path}" if path else url

    def get_phone_url(self, path: str = "") -> str:
        """Build a URL under the configured phone number."""
        return self.get_node_url(self.phone_number_id, path)


class WhatsAppFormDataBuilder:
    """Builds form data for multipart requests (media upload)."""

    @staticmethod
    def build_form_data(
        payload: dict[str, Any], files: dict[str, Any]
    ) -> aiohttp.FormData:
        """Build FormData for multipart/form-data requests.

        Args:
            payload: Data fields to include in the form
            files: Files in format {field_name: (filename, file_handle_or_bytes, content_type)}

        Raises:
            ValueError: If file format is invalid
        """
        form = aiohttp.FormData()

        # Data fields go first, Graph API expects messaging_product before file
        if payload:
            for key, value in payload.items():
                form.add_field(key, str(value))

        for field_name, file_info in files.items():
            if isinstance(file_info, tuple) and len(file_info) == 3:
                filename, file_handle, content_type = file_info

                if hasattr(file_handle, "read"):
                    file_content = file_handle.read()
                else:
                    file_content = file_handle

                form.add_field(
                    field_name,
                    file_content,
                    filename=filename,
                    content_type=content_type,
                )
            else:
                raise ValueError(
                    f"Invalid file format for field '{field_name}'. "
                    f"Expected tuple (filename, file_handle, content_type)"
                )

        return form


class WhatsAppClient:
    """
    Authenticated Graph API transport used by every resource module.

    The client holds a frozen ClientConfig and an injected aiohttp session, so
    one instance can serve any number of concurrent requests.

    Example:
        async with aiohttp.ClientSession() as session:
            client = WhatsAppClient(session, ClientConfig.from_settings())
            result = await client.execute(
                "POST", "messages", MessageResponse, body=payload
            )
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: ClientConfig,
        logger: ContextLogger | None = None,
    ):
        """Initialize the client.

        Args:
            session: aiohttp session managed by the caller
            config: Credentials and endpoint configuration
            logger: Pre-configured logger instance
        """
        self.session = session
        self.config = config
        self.logger = logger or get_logger(__name__).bind(
            tenant_id=config.phone_number_id
        )
        self.url_builder = WhatsAppUrlBuilder(
            config.base_url, config.api_version, config.phone_number_id
        )
        self.form_builder = WhatsAppFormDataBuilder()

        self.logger.debug(
            f"WhatsApp client initialized for phone_id: {config.phone_number_id}, "
            f"api_version: {config.api_version}"
        )

    def __repr__(self) -> str:
        return (
            f"WhatsAppClient(phone_number_id={self.config.phone_number_id!r}, "
            f"api_version={self.config.api_version!r}, "
            f"base_url={self.config.base_url!r})"
        )

    @property
    def phone_number_id(self) -> str:
        return self.config.phone_number_id

    @property
    def waba_id(self) -> str | None:
        return self.config.waba_id

    def _get_headers(self, include_content_type: bool = True) -> dict[str, str]:
        """Get HTTP headers for Graph API requests.

        Args:
            include_content_type: Whether to include the JSON Content-Type header
        """
        headers = {"Authorization": f"Bearer {self.config.access_token}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _serialize_body(body: dict[str, Any] | BaseModel) -> dict[str, Any]:
        if isinstance(body, BaseModel):
            return body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return body

    async def execute(
        self,
        method: str,
        path: str,
        response_model: type[T] | None = None,
        *,
        body: dict[str, Any] | BaseModel | None = None,
        params: dict[str, Any] | None = None,
        node_id: str | None = None,
        form: aiohttp.FormData | None = None,
        timeout: float | None = None,
    ) -> ApiResult[T]:
        """Send one request and decode the outcome.

        Args:
            method: HTTP method
            path: Path relative to the node, e.g. "messages"; "" targets the node
            response_model: Expected success shape; None returns the decoded JSON
            body: JSON body as a dict or pydantic model
            params: Query string parameters
            node_id: Graph node the path hangs off; defaults to the phone number ID
            form: Multipart body (mutually exclusive with body)
            timeout: Per-call deadline in seconds; defaults to the config timeout

        Returns:
            ApiResult holding the decoded value or one ApiError
        """
        if body is not None and form is not None:
            raise ValueError("A request cannot carry both a JSON body and a form")

        method = method.upper()
        url = (
            self.url_builder.get_node_url(node_id, path)
            if node_id
            else self.url_builder.get_phone_url(path)
        )
        client_timeout = aiohttp.ClientTimeout(total=timeout or self.config.timeout)

        request_kwargs: dict[str, Any] = {"params": params, "timeout": client_timeout}
        if form is not None:
            # aiohttp sets the multipart Content-Type and boundary
            request_kwargs["headers"] = self._get_headers(include_content_type=False)
            request_kwargs["data"] = form
        elif body is not None:
            request_kwargs["headers"] = self._get_headers()
            request_kwargs["data"] = json.dumps(self._serialize_body(body))
        else:
            request_kwargs["headers"] = self._get_headers(include_content_type=False)

        self.logger.debug(f"{method} {url} params={params}")

        try:
            async with self.session.request(method, url, **request_kwargs) as response:
                status = response.status
                raw = await response.read()
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
        except asyncio.TimeoutError:
            self.logger.error(f"{method} {url} timed out")
            return ApiResult.fail(
                TransportFailure(
                    message=f"Request timed out after {client_timeout.total}s",
                    timed_out=True,
                )
            )
        except aiohttp.ClientError as err:
            self.logger.error(f"{method} {url} failed: {err!r}")
            return ApiResult.fail(TransportFailure(message=str(err) or repr(err)))

        text = raw.decode("utf-8", errors="replace")

        if 200 <= status < 300:
            return self._decode_success(status, text, response_model)

        error = self._decode_failure(status, text, retry_after)
        self._log_failure(method, url, error)
        return ApiResult.fail(error)

    def _decode_success(
        self, status: int, text: str, response_model: type[T] | None
    ) -> ApiResult[T]:
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as err:
            self.logger.error(f"Response body is not JSON (HTTP {status}): {err}")
            return ApiResult.fail(
                DecodeFailure(
                    message=f"Response body is not valid JSON: {err}",
                    http_status=status,
                    body=text,
                )
            )

        if response_model is None:
            return ApiResult.ok(data)

        try:
            value = TypeAdapter(response_model).validate_python(data)
        except ValidationError as err:
            self.logger.error(
                f"Response does not match {getattr(response_model, '__name__', response_model)}: "
                f"{err.error_count()} error(s)"
            )
            return ApiResult.fail(
                DecodeFailure(
                    message=f"Response does not match the expected shape: {err}",
                    http_status=status,
                    body=text,
                )
            )

        self.logger.debug(f"HTTP {status} decoded into {type(value).__name__}")
        return ApiResult.ok(value)

    @staticmethod
    def _decode_failure(
        status: int, text: str, retry_after: float | None
    ) -> BaseApiError:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None

        envelope = parse_error_envelope(data)
        if envelope is None:
            return DecodeFailure(
                message=f"HTTP {status} with a body that is not a provider error envelope",
                http_status=status,
                body=text,
            )
        return classify_error(envelope, http_status=status, retry_after=retry_after)

    def _log_failure(self, method: str, url: str, error: BaseApiError) -> None:
        if isinstance(error, AuthenticationFailed):
            self.logger.critical(
                f"🚨 WhatsApp authentication FAILED for phone_id {self.phone_number_id} "
                f"(token {self.config.masked_token}): {error.message}"
            )
        elif isinstance(error, RateLimited):
            self.logger.warning(
                f"Rate limited on {method} {url} (code {error.code}, "
                f"retry_after={error.retry_after})"
            )
        elif isinstance(error, DecodeFailure):
            self.logger.error(
                f"{method} {url} returned HTTP {error.http_status}: "
                f"{(error.body or '')[:_LOG_BODY_LIMIT]}"
            )
        else:
            self.logger.error(f"{method} {url} failed: {error}")

    async def post_request(
        self,
        path: str,
        body: dict[str, Any] | BaseModel,
        response_model: type[T] | None = None,
        node_id: str | None = None,
    ) -> ApiResult[T]:
        """POST a JSON body."""
        return await self.execute(
            "POST", path, response_model, body=body, node_id=node_id
        )

    async def get_request(
        self,
        path: str,
        response_model: type[T] | None = None,
        params: dict[str, Any] | None = None,
        node_id: str | None = None,
    ) -> ApiResult[T]:
        """GET a resource."""
        return await self.execute(
            "GET", path, response_model, params=params, node_id=node_id
        )

    async def delete_request(
        self,
        path: str,
        response_model: type[T] | None = None,
        params: dict[str, Any] | None = None,
        node_id: str | None = None,
    ) -> ApiResult[T]:
        """DELETE a resource."""
        return await self.execute(
            "DELETE", path, response_model, params=params, node_id=node_id
        )
