"""Application settings and the persisted webhook configuration."""

from webhook_chat.config.settings import AppSettings, get_settings
from webhook_chat.config.store import CONFIG_STORAGE_KEY, ConfigStore

__all__ = ["CONFIG_STORAGE_KEY", "AppSettings", "ConfigStore", "get_settings"]
