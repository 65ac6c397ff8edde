"""Main application entry point.

Runs FastAPI with the NiceGUI pages mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    FastAPI serves /health and /stats, NiceGUI serves the chat and dashboard
    pages. Both are reachable on the same port.
    """
    import uvicorn
    from nicegui import ui

    from chatdesk.api.app import create_app
    from chatdesk.config import get_client_config
    from chatdesk.ui.chat_page import chat_page  # noqa: F401 - Registers the page
    from chatdesk.ui.dashboard_page import dashboard_page  # noqa: F401 - Registers the page

    # Invalid configuration aborts startup
    config = get_client_config()
    app = create_app()

    ui.run_with(
        app,
        title="chatdesk",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chatdesk-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Starting chatdesk on http://{host}:{port} (assistant at {config.ask_url})")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
