"""Test package for the chat relay.

Structure:
    - unit/: SSE codec, settings, upstream client, conversation and consumer
    - integration/: Relay endpoint and consumer driven end to end in-process

The upstream chat service is always stubbed with httpx.MockTransport; no
network access or API key is needed. Leverages pytest with pytest-check for
soft assertions.
"""
