"""Server settings for the combined relay and chat UI process.

The chat page calls the relay over HTTP, so it needs a URL that reaches the
same uvicorn server it is mounted on. That URL is derived from the bound
host and port unless ``API_BASE_URL`` points somewhere else.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

RELAY_PATH = "/api/chat"

# Wildcard binds are not connectable addresses.
_LOOPBACK = {"0.0.0.0": "127.0.0.1", "::": "[::1]", "": "127.0.0.1"}


class ServerSettings(BaseModel):
    """How the server binds and where the chat page finds the relay.

    Attributes:
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
        log_level: Root logging level name.
        storage_secret: Secret NiceGUI signs its session storage with.
        relay_base_url: Base URL of an external relay. When unset, the
            relay on this server is used.
    """

    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "8000")),
        ge=1,
        le=65535,
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "chat-relay-secret")
    )
    relay_base_url: str | None = Field(default_factory=lambda: os.getenv("API_BASE_URL") or None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to an upper-case standard level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def relay_url(self) -> str:
        """Relay endpoint the chat page posts to."""
        if self.relay_base_url:
            return f"{self.relay_base_url.rstrip('/')}{RELAY_PATH}"
        host = _LOOPBACK.get(self.host, self.host)
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        return f"http://{host}:{self.port}{RELAY_PATH}"


def get_server_settings() -> ServerSettings:
    """Create server settings from environment."""
    return ServerSettings()
