"""Main application entry point.

Runs FastAPI with the NiceGUI chat page mounted on the same uvicorn server.
Environment variables are loaded from .env file.
"""

import logging
import sys

import uvicorn
from nicegui import ui

from chat_relay.api.app import create_app
from chat_relay.server import ServerSettings, get_server_settings
from chat_relay.ui.chat_page import register_chat_page

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run(settings: ServerSettings) -> None:
    """Serve the relay endpoint and the chat page from one process.

    Args:
        settings: Bind address, logging and relay location.
    """
    app = create_app()
    register_chat_page(settings.relay_url)

    ui.run_with(app, title="Vapi Chat", storage_secret=settings.storage_secret)

    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    logger.info(f"Chat page posts to {settings.relay_url}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """Application entry point."""
    settings = get_server_settings()
    configure_logging(settings.log_level)
    run(settings)


if __name__ == "__main__":
    main()
