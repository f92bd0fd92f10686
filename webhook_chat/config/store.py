"""Persisted webhook configuration.

The two webhook URLs live as one JSON string under a versioned key in any
string key-value mapping. In the browser UI that mapping is NiceGUI's
per-user storage; tests use a plain dict.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from pydantic import ValidationError

from webhook_chat.models.schemas import WebhookConfig

logger = logging.getLogger(__name__)

# Bump the version when the default URLs change so stale configs are dropped
CONFIG_STORAGE_KEY = "webhook_chat_config_v2"


class ConfigStore:
    """Loads and saves the WebhookConfig in a key-value store."""

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        defaults: WebhookConfig,
        key: str = CONFIG_STORAGE_KEY,
    ) -> None:
        self._storage = storage
        self._defaults = defaults
        self._key = key

    @property
    def defaults(self) -> WebhookConfig:
        return self._defaults

    def load(self) -> WebhookConfig:
        """Return the stored config, or the defaults.

        Never raises: missing or malformed data falls back to the defaults,
        and a stored empty URL falls back to the default for that URL.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return self._defaults

        try:
            stored = WebhookConfig.model_validate_json(raw)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable webhook config under {self._key!r}: {e}")
            return self._defaults

        return WebhookConfig(
            ingestion_url=stored.ingestion_url or self._defaults.ingestion_url,
            chat_url=stored.chat_url or self._defaults.chat_url,
        )

    def save(self, config: WebhookConfig) -> None:
        self._storage[self._key] = config.model_dump_json(by_alias=True)
        logger.info(
            f"Saved webhook config (ingestion={config.ingestion_url or '<unset>'}, "
            f"chat={config.chat_url or '<unset>'})"
        )
