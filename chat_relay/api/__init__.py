"""FastAPI endpoints for the chat relay.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Relay a message upstream and stream the reply as SSE
"""

from chat_relay.api.app import app, create_app

__all__ = ["app", "create_app"]
