"""
Pytest configuration and common fixtures for wacloud tests.

Provides environment setup, webhook payload builders and an in-process Graph
API stand-in served by aiohttp's TestServer.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from wacloud.core.config.client_config import ClientConfig
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient

TEST_TOKEN = "EAAtest_token_1234567890"
TEST_PHONE_ID = "106540352242922"
TEST_WABA_ID = "102290129340398"
TEST_API_VERSION = "v21.0"


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "PROD")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("WP_PHONE_ID", TEST_PHONE_ID)
    monkeypatch.setenv("WP_ACCESS_TOKEN", TEST_TOKEN)
    monkeypatch.setenv("WP_BID", TEST_WABA_ID)
    monkeypatch.setenv("WHATSAPP_WEBHOOK_VERIFY_TOKEN", "test_verify_token")
    monkeypatch.delenv("API_VERSION", raising=False)
    monkeypatch.delenv("BASE_URL", raising=False)
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("EMIT_SENT_STATUS", raising=False)


# ================================================================
# Webhook payload builders
# ================================================================


def make_message(
    message_type: str,
    content: Any = None,
    message_id: str = "wamid.HBgLMTY1MDM4Nzk0MzkVAgASGBQzQTRBNjU5OUFFRTAzODEwMTQ0RgA=",
    sender: str = "16505551234",
    timestamp: str = "1749416383",
    **extra: Any,
) -> dict[str, Any]:
    """Build one inbound message record."""
    record: dict[str, Any] = {
        "from": sender,
        "id": message_id,
        "timestamp": timestamp,
        "type": message_type,
    }
    if content is not None:
        record[message_type] = content
    record.update(extra)
    return record


def make_status(
    status: str,
    message_id: str = "wamid.HBgLMTY1MDM4Nzk0MzkVAgARGBI3MDdGMTQ0QjM5RDE3QkZCMDQA",
    recipient_id: str = "16505551234",
    timestamp: str = "1749416400",
    **extra: Any,
) -> dict[str, Any]:
    """Build one outbound message status record."""
    record: dict[str, Any] = {
        "id": message_id,
        "status": status,
        "timestamp": timestamp,
        "recipient_id": recipient_id,
    }
    record.update(extra)
    return record


def make_payload(
    messages: list[Any] | None = None,
    statuses: list[Any] | None = None,
    errors: list[Any] | None = None,
    contacts: list[Any] | None = None,
    waba_id: str = TEST_WABA_ID,
    phone_number_id: str = TEST_PHONE_ID,
) -> dict[str, Any]:
    """Build a webhook delivery with a single entry and change."""
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550783881",
            "phone_number_id": phone_number_id,
        },
    }
    if contacts is not None:
        value["contacts"] = contacts
    if messages is not None:
        value["messages"] = messages
    if statuses is not None:
        value["statuses"] = statuses
    if errors is not None:
        value["errors"] = errors

    return {
        "object": "whatsapp_business_account",
        "entry": [
            {"id": waba_id, "changes": [{"field": "messages", "value": value}]}
        ],
    }


@pytest.fixture
def payload_builder() -> Callable[..., dict[str, Any]]:
    return make_payload


# ================================================================
# Graph API stand-in
# ================================================================


class FakeGraphApi:
    """
    Records incoming requests and answers with canned responses.

    Handlers are registered per (method, path) and receive the aiohttp
    request; by default every call returns `{"success": true}`.
    """

    def __init__(self):
        self.requests: list[dict[str, Any]] = []
        self.routes: dict[tuple[str, str], Callable[[web.Request], Any]] = {}
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._dispatch)

    def on(self, method: str, path: str, handler: Callable[[web.Request], Any]) -> None:
        self.routes[(method.upper(), path)] = handler

    def respond(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        async def handler(request: web.Request) -> web.StreamResponse:
            if text is not None:
                return web.Response(status=status, text=text, headers=headers)
            return web.json_response(json_body, status=status, headers=headers)

        self.on(method, path, handler)

    async def _dispatch(self, request: web.Request) -> web.StreamResponse:
        body = await request.read()
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "query": dict(request.query),
                "headers": dict(request.headers),
                "body": body,
            }
        )
        handler = self.routes.get((request.method, request.path))
        if handler is None:
            return web.json_response({"success": True})
        return await handler(request)

    @property
    def last_request(self) -> dict[str, Any]:
        return self.requests[-1]


@pytest.fixture
async def graph_api() -> AsyncGenerator[tuple[FakeGraphApi, str], None]:
    """Serve a FakeGraphApi and yield it with its base URL."""
    fake = FakeGraphApi()
    server = TestServer(fake.app)
    await server.start_server()
    try:
        yield fake, str(server.make_url("")).rstrip("/")
    finally:
        await server.close()


@pytest.fixture
async def http_session() -> AsyncGenerator[aiohttp.ClientSession, None]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def make_client(
    graph_api, http_session
) -> Callable[..., tuple[WhatsAppClient, FakeGraphApi]]:
    """Build a WhatsAppClient pointed at the fake Graph API."""
    fake, base_url = graph_api

    def _make(**overrides: Any) -> tuple[WhatsAppClient, FakeGraphApi]:
        config = ClientConfig(
            access_token=overrides.pop("access_token", TEST_TOKEN),
            phone_number_id=overrides.pop("phone_number_id", TEST_PHONE_ID),
            waba_id=overrides.pop("waba_id", TEST_WABA_ID),
            api_version=overrides.pop("api_version", TEST_API_VERSION),
            base_url=overrides.pop("base_url", base_url),
            **overrides,
        )
        return WhatsAppClient(http_session, config), fake

    return _make


@pytest.fixture
def message_builder() -> Callable[..., dict[str, Any]]:
    return make_message


@pytest.fixture
def status_builder() -> Callable[..., dict[str, Any]]:
    return make_status
