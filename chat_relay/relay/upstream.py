"""Streaming client for the upstream chat service.

Opens one POST per relay request and exposes the upstream event stream as
an async iterator of text deltas. Only ``response.output_text.delta`` events
are surfaced; every other event type is dropped.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import Any

import httpx

from chat_relay.relay.config import RelaySettings, UpstreamCredentials
from chat_relay.relay.errors import ParseError, UpstreamError
from chat_relay.relay.sse import DONE_SENTINEL, SSELineDecoder, parse_payload

logger = logging.getLogger(__name__)

TEXT_DELTA_EVENT = "response.output_text.delta"


def extract_text_delta(data: dict[str, Any]) -> str | None:
    """Return the delta text of a text-delta event, or None for anything else."""
    if data.get("type") != TEXT_DELTA_EVENT:
        return None
    delta = data.get("delta")
    if not isinstance(delta, str) or not delta:
        return None
    return delta


class UpstreamStream:
    """An open upstream response being consumed as text deltas.

    Owns the httpx client and response; both are released when iteration
    finishes, fails, or ``aclose`` is called.
    """

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response) -> None:
        self._client = client
        self._response = response

    async def _payloads(self) -> AsyncGenerator[str]:
        decoder = SSELineDecoder()
        async for text in self._response.aiter_text():
            for payload in decoder.feed(text):
                yield payload
        for payload in decoder.flush():
            yield payload

    async def deltas(self) -> AsyncGenerator[str]:
        """Yield text deltas in the order upstream sends them.

        Yields:
            Non-empty text fragments of the assistant's response.

        Raises:
            UpstreamError: If the connection fails while reading.
        """
        try:
            async with aclosing(self._payloads()) as payloads:
                async for payload in payloads:
                    if payload.strip() == DONE_SENTINEL:
                        break
                    try:
                        data = parse_payload(payload)
                    except ParseError as e:
                        logger.warning(f"Skipping malformed upstream frame: {e}")
                        continue
                    delta = extract_text_delta(data)
                    if delta is not None:
                        yield delta
        except httpx.HTTPError as e:
            logger.error(f"Upstream stream failed mid-response: {e}")
            raise UpstreamError(f"Upstream stream interrupted: {e}") from e
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Release the upstream connection."""
        await self._response.aclose()
        await self._client.aclose()


class UpstreamClient:
    """Opens streaming requests against the upstream chat endpoint.

    A new httpx client is created for every stream; connections are not
    shared between relay requests.
    """

    def __init__(
        self,
        settings: RelaySettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the upstream client.

        Args:
            settings: Upstream URL, model and timeout.
            transport: Optional httpx transport, used to stub upstream in tests.
        """
        self._settings = settings
        self._transport = transport

    def build_payload(self, message: str, credentials: UpstreamCredentials) -> dict[str, Any]:
        """Build the JSON body for an upstream streaming request."""
        return {
            "model": self._settings.model,
            "assistantId": credentials.assistant_id,
            "input": message,
            "stream": True,
        }

    async def open_stream(
        self,
        message: str,
        credentials: UpstreamCredentials,
    ) -> UpstreamStream:
        """Send the message upstream and wait for the response headers.

        Args:
            message: The user's message, forwarded as ``input``.
            credentials: Bearer key and assistant identifier.

        Returns:
            UpstreamStream ready to be iterated.

        Raises:
            UpstreamError: If upstream is unreachable or answers with an error status.
        """
        client = httpx.AsyncClient(timeout=self._settings.timeout, transport=self._transport)
        request = client.build_request(
            "POST",
            self._settings.upstream_url,
            json=self.build_payload(message, credentials),
            headers={
                "Authorization": f"Bearer {credentials.api_key}",
                "Accept": "text/event-stream",
            },
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(f"Failed to reach upstream {self._settings.upstream_url}: {e}")
            raise UpstreamError(f"Failed to reach upstream: {e}") from e

        if response.is_error:
            await response.aclose()
            await client.aclose()
            logger.error(f"Upstream rejected request with HTTP {response.status_code}")
            raise UpstreamError(
                f"Upstream returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        logger.info(f"Opened upstream stream for assistant {credentials.assistant_id}")
        return UpstreamStream(client, response)
