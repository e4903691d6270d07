"""Chat session state and the relay stream consumer.

Holds the conversation, the user's credentials and the loading flag for one
browser session, and turns a relay SSE response into a growing assistant
message.
"""

import codecs
import logging
from collections.abc import Callable
from enum import Enum

import httpx

from chat_relay.models.schemas import Message, Role
from chat_relay.relay.errors import ParseError
from chat_relay.relay.sse import SSELineDecoder, parse_payload
from chat_relay.ui.conversation import Conversation

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."


class ConsumerState(str, Enum):
    """Lifecycle of a single submitted message."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    DONE = "done"
    ERRORED = "errored"


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(
        self,
        relay_url: str,
        on_update: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        """Initialize an empty session.

        Args:
            relay_url: Relay endpoint URL.
            on_update: Called after every change to the conversation or loading flag.
            transport: Optional httpx transport, used to stub the relay in tests.
            timeout: Seconds to wait on connect and between streamed reads.
        """
        self.relay_url = relay_url
        self.conversation = Conversation()
        self.api_key: str = ""
        self.assistant_id: str = ""
        self.is_loading: bool = False
        self.state = ConsumerState.IDLE
        self.last_outcome: ConsumerState | None = None
        self._on_update = on_update
        self._transport = transport
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip() and self.assistant_id.strip())

    def can_submit(self, text: str) -> bool:
        """Whether ``text`` may be sent right now."""
        return bool(text.strip()) and not self.is_loading and self.is_configured

    def new_chat(self) -> bool:
        """Clear the conversation unless a reply is still streaming."""
        if self.is_loading:
            return False
        self.conversation.clear()
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()

    async def submit(self, text: str) -> bool:
        """Send a message through the relay and stream the reply into the conversation.

        Appends the user message and an empty assistant placeholder, then
        fills the placeholder as deltas arrive. Any request or stream failure
        replaces the placeholder with a fixed apology.

        Args:
            text: The user's message.

        Returns:
            False if the submission was refused, True once it has finished.
        """
        if not self.can_submit(text):
            return False

        self.conversation.append(Message(role=Role.USER, content=text))
        self.conversation.append(Message(role=Role.ASSISTANT, content=""))
        self.is_loading = True
        self.state = ConsumerState.SENDING
        self._notify()

        try:
            async with (
                httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client,
                client.stream(
                    "POST",
                    self.relay_url,
                    json={
                        "message": text,
                        "apiKey": self.api_key,
                        "assistantId": self.assistant_id,
                    },
                    headers={"Accept": "text/event-stream"},
                ) as response,
            ):
                response.raise_for_status()
                self.state = ConsumerState.STREAMING
                await self._consume(response)
            self.last_outcome = ConsumerState.DONE
        except httpx.HTTPStatusError as e:
            logger.error(f"Relay returned HTTP {e.response.status_code}")
            self._fail()
        except httpx.HTTPError as e:
            logger.error(f"Relay request failed: {e}")
            self._fail()
        except Exception as e:
            logger.exception(f"Unexpected error while streaming reply: {e}")
            self._fail()
        finally:
            self.is_loading = False
            self.state = ConsumerState.IDLE
            self._notify()

        return True

    def _fail(self) -> None:
        self.last_outcome = ConsumerState.ERRORED
        self.conversation.update_last(ERROR_MESSAGE)

    async def _consume(self, response: httpx.Response) -> None:
        text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        lines = SSELineDecoder()
        accumulated = ""

        async for chunk in response.aiter_bytes():
            for payload in lines.feed(text_decoder.decode(chunk)):
                accumulated = self._apply(payload, accumulated)

        tail = lines.feed(text_decoder.decode(b"", final=True)) + lines.flush()
        for payload in tail:
            accumulated = self._apply(payload, accumulated)

    def _apply(self, payload: str, accumulated: str) -> str:
        """Fold one data payload into the accumulated reply."""
        try:
            data = parse_payload(payload)
        except ParseError as e:
            logger.warning(f"Failed to parse streaming data: {e}")
            return accumulated

        delta = data.get("delta")
        if not isinstance(delta, str) or not delta:
            return accumulated

        accumulated += delta
        self.conversation.update_last(accumulated)
        self._notify()
        return accumulated
