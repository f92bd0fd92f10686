"""In-memory image previews served at ``/previews/{token}``.

Each preview belongs to one upload item and must be released when the item
is removed or the queue is cleared.
"""

import logging
import secrets

from webhook_chat.models.schemas import OutgoingFile

logger = logging.getLogger(__name__)

PREVIEW_ROUTE = "/previews"


class PreviewStore:
    """Holds preview bytes keyed by random tokens."""

    def __init__(self) -> None:
        self._previews: dict[str, tuple[bytes, str]] = {}

    def __len__(self) -> int:
        return len(self._previews)

    def __contains__(self, url: str) -> bool:
        return self._token(url) in self._previews

    @staticmethod
    def _token(url: str) -> str:
        return url.rsplit("/", 1)[-1]

    def create(self, file: OutgoingFile) -> str:
        """Store the file bytes and return the URL serving them."""
        token = secrets.token_urlsafe(16)
        self._previews[token] = (file.content, file.mime_type)
        return f"{PREVIEW_ROUTE}/{token}"

    def get(self, token: str) -> tuple[bytes, str] | None:
        return self._previews.get(token)

    def release(self, url: str) -> bool:
        """Drop a preview. Returns False if it was not held."""
        released = self._previews.pop(self._token(url), None) is not None
        if not released:
            logger.debug(f"Preview {url} already released")
        return released


# Module-level singleton instance
_preview_store: PreviewStore | None = None


def get_preview_store() -> PreviewStore:
    """Get or create the process-wide preview store."""
    global _preview_store
    if _preview_store is None:
        _preview_store = PreviewStore()
    return _preview_store
