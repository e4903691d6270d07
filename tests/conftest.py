"""Pytest fixtures and shared test configuration.

Fixtures:
    - relay_settings: Settings pointing at a fake upstream URL
    - fake_upstream: Scriptable stand-in for the upstream chat service
    - app: FastAPI relay wired to the fake upstream
    - async_client: HTTPX client for API testing
"""

import json
from collections.abc import AsyncGenerator, AsyncIterator, Iterable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from chat_relay.api.app import create_app
from chat_relay.api.chat import get_upstream_client
from chat_relay.relay.config import RelaySettings
from chat_relay.relay.upstream import TEXT_DELTA_EVENT, UpstreamClient

UPSTREAM_URL = "https://upstream.test/chat"


def upstream_frames(deltas: Iterable[str], done: bool = True) -> bytes:
    """Encode deltas as upstream text-delta SSE events."""
    body = "".join(
        f"data: {json.dumps({'type': TEXT_DELTA_EVENT, 'delta': d})}\n\n" for d in deltas
    )
    if done:
        body += "data: [DONE]\n\n"
    return body.encode()


async def chunked(parts: Iterable[bytes], error: Exception | None = None) -> AsyncIterator[bytes]:
    """Yield byte parts one by one, optionally failing afterwards."""
    for part in parts:
        yield part
    if error is not None:
        raise error


def split_every(data: bytes, size: int) -> list[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


class FakeUpstream:
    """Records upstream requests and replies with a scripted response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.parts: list[bytes] = [upstream_frames(["Hello", ", ", "world"])]
        self.error: Exception | None = None
        self.connect_error: Exception | None = None

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.connect_error is not None:
            raise self.connect_error
        return httpx.Response(
            self.status_code,
            headers={"Content-Type": "text/event-stream"},
            content=chunked(self.parts, self.error),
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def relay_settings() -> RelaySettings:
    return RelaySettings(upstream_url=UPSTREAM_URL, model="gpt-4o", timeout=5.0)


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def upstream_client(relay_settings: RelaySettings, fake_upstream: FakeUpstream) -> UpstreamClient:
    return UpstreamClient(relay_settings, transport=fake_upstream.transport())


@pytest.fixture
def app(relay_settings: RelaySettings, fake_upstream: FakeUpstream) -> FastAPI:
    """Relay application whose upstream calls hit the fake upstream."""
    application = create_app()
    application.dependency_overrides[get_upstream_client] = lambda: UpstreamClient(
        relay_settings, transport=fake_upstream.transport()
    )
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_body() -> dict[str, str]:
    return {"message": "What is Vapi?", "apiKey": "sk-test-key", "assistantId": "asst-123"}
