"""Integration tests for components working together as a system.

Coverage:
    - Relay endpoint with real HTTP requests through ASGITransport
    - ChatSession consuming the relay app end to end

Only the upstream chat service is stubbed.
"""
