"""Application settings with environment variable loading.

Pydantic-based configuration for the web process. Webhook URLs here are
only the defaults; users override them from the settings dialog.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

PLACEHOLDER_WEBHOOK_URL = "https://n8n.example.com/webhook/knowledge-base"


class AppSettings(BaseModel):
    """Configuration for the Webhook Chat process.

    Attributes:
        default_ingestion_url: Ingestion webhook used until the user saves one.
        default_chat_url: Chat webhook used until the user saves one.
        request_timeout: Seconds to wait for a webhook before giving up.
        clear_delay: Seconds a successful upload stays visible before clearing.
        max_upload_mb: Largest file the upload picker accepts.
        storage_secret: Secret for NiceGUI's per-browser storage.
    """

    default_ingestion_url: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_INGESTION_URL", PLACEHOLDER_WEBHOOK_URL),
        description="Default ingestion webhook URL",
    )
    default_chat_url: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_CHAT_URL", PLACEHOLDER_WEBHOOK_URL),
        description="Default chat webhook URL",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120")),
        gt=0.0,
        description="Webhook request timeout in seconds",
    )
    clear_delay: float = Field(
        default_factory=lambda: float(os.getenv("CLEAR_DELAY", "2")),
        ge=0.0,
        description="Delay before a successful upload batch is cleared",
    )
    max_upload_mb: int = Field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_MB", "50")),
        ge=1,
        le=1024,
        description="Maximum size of a single uploaded file in megabytes",
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "webhook-chat-secret"),
        description="Secret used to sign NiceGUI browser storage",
    )

    @field_validator("default_ingestion_url", "default_chat_url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Strip surrounding whitespace from webhook URLs."""
        return v.strip()

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def get_settings() -> AppSettings:
    """Create application settings from environment.

    Returns:
        Configured AppSettings instance.

    Raises:
        ValidationError: If an environment value is out of range.
    """
    return AppSettings()
