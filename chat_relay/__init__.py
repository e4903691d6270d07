"""Chat Relay - streaming proxy and chat UI for a hosted conversational-AI API.

Combines FastAPI for the SSE relay endpoint, httpx for upstream and relay
streaming, NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: HTTP relay endpoint and error rendering
    - relay: Upstream client, SSE codec, settings and error types
    - ui: Chat session state, stream consumer and web interface
    - models: Request/response and message schemas
"""

__version__ = "0.1.0"
