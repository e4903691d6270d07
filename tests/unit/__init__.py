"""Unit tests for individual components in isolation.

Coverage:
    - relay/: SSE framing, settings validation, upstream streaming client
    - ui/: Conversation container and ChatSession consumer

Uses httpx.MockTransport in place of real HTTP peers.
"""
