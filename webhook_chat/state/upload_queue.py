"""Queue of files waiting to be sent to the ingestion webhook.

Items move pending -> uploading -> success | error, always as a batch.
Only pending items can be removed.
"""

import logging
from collections.abc import Iterable

from webhook_chat.models.schemas import FileKind, OutgoingFile, UploadItem, UploadStatus
from webhook_chat.state.previews import PreviewStore

logger = logging.getLogger(__name__)


class UploadQueue:
    """Ordered upload items in selection order."""

    def __init__(self, previews: PreviewStore) -> None:
        self._previews = previews
        self._items: list[UploadItem] = []

    @property
    def items(self) -> tuple[UploadItem, ...]:
        return tuple(self._items)

    @property
    def files(self) -> list[OutgoingFile]:
        return [item.file for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def add(self, files: Iterable[OutgoingFile]) -> list[UploadItem]:
        """Append files as pending items. Images get a preview URL."""
        added: list[UploadItem] = []
        for file in files:
            kind = file.kind
            preview_url = self._previews.create(file) if kind is FileKind.IMAGE else None
            added.append(UploadItem(file=file, kind=kind, preview_url=preview_url))
        self._items.extend(added)
        return added

    def _release(self, item: UploadItem) -> None:
        if item.preview_url is not None:
            self._previews.release(item.preview_url)
            item.preview_url = None

    def remove(self, item_id: str) -> bool:
        """Remove a pending item and release its preview.

        Returns:
            False, leaving the queue untouched, if the item is unknown or no
            longer pending.
        """
        for index, item in enumerate(self._items):
            if item.id != item_id:
                continue
            if item.status is not UploadStatus.PENDING:
                logger.debug(f"Refusing to remove {item.file.name}: status is {item.status.value}")
                return False
            self._release(item)
            del self._items[index]
            return True
        return False

    def mark_uploading(self) -> None:
        self.mark_all(UploadStatus.UPLOADING)

    def mark_all(self, status: UploadStatus) -> None:
        for item in self._items:
            item.status = status

    def clear(self) -> None:
        """Drop every item, releasing all previews."""
        for item in self._items:
            self._release(item)
        self._items.clear()
