"""Pydantic models for relay requests, responses and conversation messages."""

from chat_relay.models.schemas import ChatRequest, DeltaFrame, ErrorResponse, Message, Role

__all__ = ["ChatRequest", "DeltaFrame", "ErrorResponse", "Message", "Role"]
