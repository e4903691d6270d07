"""Relay configuration with environment variable loading.

Pydantic-based settings for the upstream chat service. Settings and
credentials are built per request and passed explicitly; nothing here is
cached at module level.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_UPSTREAM_URL = "https://api.vapi.ai/chat"


class RelaySettings(BaseModel):
    """Connection settings for the upstream chat service.

    Attributes:
        upstream_url: Full URL of the upstream streaming chat endpoint.
        model: Model identifier sent with every upstream request.
        timeout: Seconds to wait on connect and between streamed reads.
    """

    upstream_url: str = Field(
        default_factory=lambda: os.getenv("RELAY_UPSTREAM_URL", DEFAULT_UPSTREAM_URL),
        description="Upstream chat endpoint URL",
    )
    model: str = Field(
        default_factory=lambda: os.getenv("RELAY_MODEL", "gpt-4o"),
        description="Model to request upstream",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("RELAY_TIMEOUT", "120")),
        gt=0.0,
        description="Upstream read timeout in seconds",
    )

    @field_validator("upstream_url")
    @classmethod
    def validate_upstream_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("upstream_url must start with http:// or https://")
        return v


class UpstreamCredentials(BaseModel):
    """Per-request credentials supplied by the user.

    Attributes:
        api_key: Bearer token for the upstream service.
        assistant_id: Identifier of the upstream assistant to talk to.
    """

    api_key: str
    assistant_id: str

    @field_validator("api_key", "assistant_id")
    @classmethod
    def validate_present(cls, v: str) -> str:
        """Reject blank credentials; present values are kept verbatim."""
        if not v or not v.strip():
            raise ValueError("API key and assistant ID are required")
        return v


def get_relay_settings() -> RelaySettings:
    """Create relay settings from environment.

    Returns:
        Fresh RelaySettings instance.
    """
    return RelaySettings()
