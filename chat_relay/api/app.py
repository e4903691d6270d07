"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_relay.api.chat import router as chat_router
from chat_relay.models.schemas import ErrorResponse
from chat_relay.relay.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting chat relay API...")
    yield
    logger.info("Shutting down chat relay API...")


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(),
    )


def register_error_handlers(application: FastAPI) -> None:
    """Render relay errors as ``{success: false, error}`` JSON bodies."""

    @application.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning(f"Rejected relay request: {exc}")
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @application.exception_handler(RequestValidationError)
    async def handle_malformed_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(f"Malformed relay request body: {exc.errors()}")
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @application.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Chat Relay API",
        description=(
            "Relays chat messages to an upstream conversational-AI service and "
            "streams the assistant's reply back as server-sent events."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    register_error_handlers(application)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "chat-relay"}

    return application


app = create_app()
