"""Relay endpoint that proxies a chat message to upstream as an SSE stream.

Validates the request, opens the upstream stream before answering, and
re-emits each upstream text delta as a ``data: {"delta": ...}`` frame.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from chat_relay.models.schemas import ChatRequest, ErrorResponse
from chat_relay.relay.config import RelaySettings, UpstreamCredentials, get_relay_settings
from chat_relay.relay.errors import ValidationError
from chat_relay.relay.sse import encode_delta
from chat_relay.relay.upstream import UpstreamClient, UpstreamStream

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def get_upstream_client(
    settings: RelaySettings = Depends(get_relay_settings),
) -> UpstreamClient:
    """Build the upstream client for a single relay request."""
    return UpstreamClient(settings)


def _validate_request(body: ChatRequest) -> tuple[str, UpstreamCredentials]:
    """Check required fields and build credentials.

    Args:
        body: The parsed relay request.

    Returns:
        The message text and the upstream credentials.

    Raises:
        ValidationError: If the message or either credential is missing.
    """
    if not body.message or not body.message.strip():
        raise ValidationError("Message is required")

    if not (body.api_key or "").strip() or not (body.assistant_id or "").strip():
        raise ValidationError("API key and assistant ID are required")

    credentials = UpstreamCredentials(api_key=body.api_key, assistant_id=body.assistant_id)
    return body.message, credentials


async def _delta_frames(stream: UpstreamStream) -> AsyncGenerator[str]:
    async for delta in stream.deltas():
        yield encode_delta(delta)


@router.post(
    "/chat",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def relay_chat(
    body: ChatRequest,
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> StreamingResponse:
    """Relay a chat message to upstream and stream the reply.

    Args:
        body: Message plus the caller's API key and assistant ID.
        upstream: Client for the upstream chat service.

    Returns:
        StreamingResponse of ``data: {"delta": ...}`` SSE frames.

    Raises:
        400: Message or credentials missing.
        500: Upstream unreachable or rejected the request.
    """
    message, credentials = _validate_request(body)

    stream = await upstream.open_stream(message, credentials)

    return StreamingResponse(
        _delta_frames(stream),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
