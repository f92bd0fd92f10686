"""FastAPI application factory.

Lifespan management, middleware and router registration for the process
that serves the Webhook Chat UI.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from webhook_chat import __version__
from webhook_chat.api.routes import router as previews_router
from webhook_chat.state.previews import get_preview_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup and report previews still held at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Webhook Chat...")
    yield
    leftover = len(get_preview_store())
    if leftover:
        logger.warning(f"Shutting down with {leftover} unreleased preview(s)")
    logger.info("Shutting down Webhook Chat...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Webhook Chat",
        description=(
            "Browser front end for knowledge base workflows: uploads documents "
            "and context to an ingestion webhook and chats through a chat webhook."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    application.include_router(previews_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "webhook-chat"}

    return application
