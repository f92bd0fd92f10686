"""Unit tests for upload tab helpers."""

from collections.abc import Callable

import pytest_check as check

from webhook_chat.models.schemas import OutgoingFile
from webhook_chat.state.previews import PreviewStore
from webhook_chat.state.upload_queue import UploadQueue
from webhook_chat.ui.upload_panel import format_size, release_on_teardown


class RecordingClient:
    """Stands in for a NiceGUI client and keeps its lifecycle handlers."""

    def __init__(self) -> None:
        self.disconnect_handlers: list[Callable[[], None]] = []
        self.delete_handlers: list[Callable[[], None]] = []

    def on_disconnect(self, handler: Callable[[], None]) -> None:
        self.disconnect_handlers.append(handler)

    def on_delete(self, handler: Callable[[], None]) -> None:
        self.delete_handlers.append(handler)


class TestReleaseOnTeardown:
    """The queue lives as long as the browser client, not its websocket."""

    def test_reconnect_keeps_queue(
        self, previews: PreviewStore, sample_files: list[OutgoingFile]
    ) -> None:
        client = RecordingClient()
        queue = UploadQueue(previews)
        queue.add(sample_files)

        release_on_teardown(client, queue)
        for handler in client.disconnect_handlers:
            handler()

        check.equal(len(queue), 3)
        check.equal(len(previews), 1)

    def test_delete_clears_queue_and_previews(
        self, previews: PreviewStore, sample_files: list[OutgoingFile]
    ) -> None:
        client = RecordingClient()
        queue = UploadQueue(previews)
        queue.add(sample_files)

        release_on_teardown(client, queue)
        for handler in client.delete_handlers:
            handler()

        check.equal(len(client.delete_handlers), 1)
        check.equal(len(queue), 0)
        check.equal(len(previews), 0)


def test_format_size() -> None:
    assert format_size(5 * 1024 * 1024) == "5.00 MB"
