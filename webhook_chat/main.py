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
    """Serve the upload and chat page, /health and /previews from one process.

    Settings are read once here; each browser then keeps its own webhook
    URLs in NiceGUI user storage, seeded from the configured defaults.
    """
    import uvicorn
    from nicegui import ui

    from webhook_chat.api.app import create_app
    from webhook_chat.config.settings import PLACEHOLDER_WEBHOOK_URL, get_settings
    from webhook_chat.ui.chat_page import index_page  # noqa: F401 - Registers the page

    settings = get_settings()
    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Webhook Chat",
        favicon="⚡",
        storage_secret=settings.storage_secret,
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting Webhook Chat on http://{host}:{port}")
    logger.info(
        f"Webhook timeout {settings.request_timeout}s, "
        f"upload limit {settings.max_upload_mb}MB, clear delay {settings.clear_delay}s"
    )
    if PLACEHOLDER_WEBHOOK_URL in (settings.default_ingestion_url, settings.default_chat_url):
        logger.warning(
            "Default webhook URLs are placeholders; set DEFAULT_INGESTION_URL and "
            "DEFAULT_CHAT_URL or configure them in the settings dialog"
        )

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
