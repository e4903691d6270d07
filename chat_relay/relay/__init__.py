"""Upstream side of the relay.

Responsibilities:
    - Per-request settings and user-supplied credentials
    - Streaming POST to the upstream chat service
    - SSE frame encoding and incremental line decoding
    - Error taxonomy shared with the consumer
"""

from chat_relay.relay.config import RelaySettings, UpstreamCredentials, get_relay_settings
from chat_relay.relay.errors import ParseError, RelayError, UpstreamError, ValidationError
from chat_relay.relay.upstream import UpstreamClient, UpstreamStream

__all__ = [
    "ParseError",
    "RelayError",
    "RelaySettings",
    "UpstreamClient",
    "UpstreamCredentials",
    "UpstreamError",
    "UpstreamStream",
    "ValidationError",
    "get_relay_settings",
]
