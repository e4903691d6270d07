"""Server-sent event framing for delta text streams.

Both hops of the relay speak the same minimal dialect: one ``data: <json>``
line per event followed by a blank line. Only ``data:`` lines carry meaning;
comments, keep-alives and other fields are ignored.
"""

import json
from typing import Any

from chat_relay.models.schemas import DeltaFrame
from chat_relay.relay.errors import ParseError

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def encode_delta(delta: str) -> str:
    """Wrap a text delta as a single SSE frame."""
    return f"{DATA_PREFIX}{DeltaFrame(delta=delta).model_dump_json()}\n\n"


def parse_payload(payload: str) -> dict[str, Any]:
    """Parse the JSON body of a ``data:`` line.

    Args:
        payload: Text after the ``data: `` prefix.

    Returns:
        The decoded JSON object.

    Raises:
        ParseError: If the payload is not valid JSON or not an object.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in SSE frame: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected JSON object in SSE frame, got {type(data).__name__}")

    return data


class SSELineDecoder:
    """Incremental splitter that turns arbitrary text chunks into data payloads.

    Transport chunks can end mid-line, so the trailing partial line is held
    back until the next chunk (or ``flush``) completes it.
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> list[str]:
        """Consume a chunk and return payloads of every completed data line."""
        self._buffer += text
        *lines, self._buffer = self._buffer.split("\n")
        return [p for p in map(self._payload, lines) if p is not None]

    def flush(self) -> list[str]:
        """Return the payload of an unterminated final line, if any."""
        line, self._buffer = self._buffer, ""
        payload = self._payload(line)
        return [payload] if payload is not None else []

    @staticmethod
    def _payload(line: str) -> str | None:
        line = line.removesuffix("\r")
        if not line.startswith(DATA_PREFIX):
            return None
        return line[len(DATA_PREFIX):]
