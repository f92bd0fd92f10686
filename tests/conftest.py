"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_webhook: In-process workflow webhook that records every form
    - webhook_client: WebhookClient wired to the fake webhook
    - webhook_url: URL the fake webhook answers on
    - sample_files: A PDF, a PNG and a text file
    - previews: Fresh PreviewStore
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request, Response
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import UploadFile

from webhook_chat.api.app import create_app
from webhook_chat.models.schemas import OutgoingFile
from webhook_chat.state import previews as previews_module
from webhook_chat.state.previews import PreviewStore
from webhook_chat.transport.client import WebhookClient

WEBHOOK_URL = "http://webhook.test/webhook/knowledge-base"


class FakeWebhook:
    """Records multipart posts and answers with a configurable response."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body = '{"output": "ok"}'
        self.media_type = "application/json"
        self.calls: list[list[tuple[str, Any]]] = []
        self.app = FastAPI()

        @self.app.post("/webhook/knowledge-base")
        async def receive(request: Request) -> Response:
            form = await request.form()
            items: list[tuple[str, Any]] = []
            for name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    items.append((name, (value.filename, value.content_type, await value.read())))
                else:
                    items.append((name, value))
            self.calls.append(items)
            return Response(
                content=self.body, status_code=self.status_code, media_type=self.media_type
            )

    def respond(self, status_code: int, body: str, media_type: str = "application/json") -> None:
        self.status_code = status_code
        self.body = body
        self.media_type = media_type

    @property
    def last_call(self) -> list[tuple[str, Any]]:
        return self.calls[-1]

    def values(self, name: str) -> list[Any]:
        return [value for key, value in self.last_call if key == name]


@pytest.fixture
def fake_webhook() -> FakeWebhook:
    return FakeWebhook()


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL


@pytest.fixture
def webhook_client(fake_webhook: FakeWebhook) -> WebhookClient:
    """WebhookClient whose requests land on the fake webhook."""
    return WebhookClient(transport=ASGITransport(app=fake_webhook.app))


@pytest.fixture
def offline_client() -> tuple[WebhookClient, list[httpx.Request]]:
    """WebhookClient whose every request fails to connect.

    Returns:
        The client and the list of requests it attempted.
    """
    attempted: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempted.append(request)
        raise httpx.ConnectError("Name or service not known", request=request)

    return WebhookClient(transport=httpx.MockTransport(handler)), attempted


@pytest.fixture
def sample_files() -> list[OutgoingFile]:
    return [
        OutgoingFile(name="report.pdf", mime_type="application/pdf", content=b"%PDF-1.4 report"),
        OutgoingFile(name="chart.png", mime_type="image/png", content=b"\x89PNG\r\n\x1a\nchart"),
        OutgoingFile(name="notes.txt", mime_type="text/plain", content=b"meeting notes"),
    ]


@pytest.fixture
def previews() -> PreviewStore:
    return PreviewStore()


@pytest.fixture
async def api_client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the FastAPI app with a fresh preview store."""
    previews_module._preview_store = None
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    previews_module._preview_store = None
