from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A rendered conversation message.

    Messages are frozen; the streaming assistant reply is updated by
    replacing the message with a copy.

    Attributes:
        role: Who sent the message.
        content: The message text.
        timestamp: When the message was created.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)


class ChatRequest(BaseModel):
    """Request payload for the relay endpoint.

    Fields are optional at the schema level so that missing input is
    reported with the relay's own error messages. Values are kept exactly
    as sent; they are forwarded upstream untouched.

    Attributes:
        message: User's message text.
        api_key: Upstream bearer key (``apiKey`` on the wire).
        assistant_id: Upstream assistant identifier (``assistantId`` on the wire).
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    api_key: str | None = Field(None, alias="apiKey")
    assistant_id: str | None = Field(None, alias="assistantId")


class DeltaFrame(BaseModel):
    """Payload of one relay SSE frame."""

    delta: str


class ErrorResponse(BaseModel):
    """JSON body returned when the relay rejects or fails a request."""

    success: Literal[False] = False
    error: str
