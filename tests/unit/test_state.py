"""Unit tests for Conversation, UploadQueue and PreviewStore."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from webhook_chat.models.schemas import FileKind, MessageRole, OutgoingFile, UploadStatus
from webhook_chat.state.conversation import Conversation
from webhook_chat.state.previews import PreviewStore
from webhook_chat.state.upload_queue import UploadQueue
from webhook_chat.transport.errors import RemoteError


class RecordingPreviewStore(PreviewStore):
    """PreviewStore that counts release calls per URL."""

    def __init__(self) -> None:
        super().__init__()
        self.released: list[str] = []

    def release(self, url: str) -> bool:
        self.released.append(url)
        return super().release(url)


class TestConversation:
    """Tests for the append-only transcript."""

    def test_user_message_records_attachment_meta(self, sample_files: list[OutgoingFile]) -> None:
        conversation = Conversation()

        message = conversation.append_user("look at these", sample_files[:2])

        check.equal(message.role, MessageRole.USER)
        check.equal([a.name for a in message.attachments], ["report.pdf", "chart.png"])
        check.equal(message.attachments[1].mime_type, "image/png")
        check.equal(message.attachments[0].size_bytes, sample_files[0].size_bytes)

    def test_failed_turn_appends_one_error_message(self) -> None:
        """User message survives and exactly one error-flagged reply follows."""
        conversation = Conversation()
        user = conversation.append_user("hello")

        conversation.append_error(RemoteError("bad node config", 500))

        messages = conversation.messages
        check.equal(len(messages), 2)
        check.equal(messages[0], user)
        check.equal(messages[1].role, MessageRole.ASSISTANT)
        check.is_true(messages[1].is_error)
        check.equal(messages[1].content, "bad node config")

    def test_error_message_includes_hint(self) -> None:
        conversation = Conversation()

        message = conversation.append_error(
            RemoteError("Unused Respond to Webhook node found", 500)
        )

        check.is_in("\n\nFIX: ", message.content)
        check.is_true(message.content.startswith("Unused Respond to Webhook node found"))

    def test_insertion_order_and_unique_ids(self) -> None:
        conversation = Conversation()
        conversation.append_user("one")
        conversation.append_reply("two")
        conversation.append_user("three")

        check.equal([m.content for m in conversation.messages], ["one", "two", "three"])
        check.equal(len({m.id for m in conversation.messages}), 3)

    def test_messages_are_immutable(self) -> None:
        conversation = Conversation()
        message = conversation.append_reply("fixed")

        with pytest.raises(ValidationError):
            message.content = "changed"

    def test_messages_view_is_read_only(self) -> None:
        conversation = Conversation()
        conversation.append_reply("x")

        assert isinstance(conversation.messages, tuple)

    def test_history_stops_before_message(self) -> None:
        conversation = Conversation()
        conversation.append_user("q1")
        conversation.append_reply("a1")
        current = conversation.append_user("q2")

        check.equal(
            conversation.history(before=current),
            [{"role": "user", "content": "q1"}, {"role": "assistant", "content": "a1"}],
        )
        check.equal(len(conversation.history()), 3)


class TestUploadQueueAdd:
    """Tests for adding files."""

    def test_items_enter_pending_in_selection_order(
        self, previews: PreviewStore, sample_files: list[OutgoingFile]
    ) -> None:
        queue = UploadQueue(previews)

        added = queue.add(sample_files)

        check.equal([i.file.name for i in queue.items], ["report.pdf", "chart.png", "notes.txt"])
        check.equal(added, list(queue.items))
        check.is_true(all(i.status is UploadStatus.PENDING for i in queue.items))

    def test_kinds_and_previews(self, previews: PreviewStore, sample_files: list[OutgoingFile]) -> None:
        """Only images get a preview URL."""
        queue = UploadQueue(previews)
        pdf, png, txt = queue.add(sample_files)

        check.equal(pdf.kind, FileKind.DOCUMENT)
        check.equal(png.kind, FileKind.IMAGE)
        check.equal(txt.kind, FileKind.DOCUMENT)
        check.is_none(pdf.preview_url)
        check.is_none(txt.preview_url)
        check.is_not_none(png.preview_url)
        check.is_in(png.preview_url, previews)

    def test_later_adds_append(self, previews: PreviewStore, sample_files: list[OutgoingFile]) -> None:
        queue = UploadQueue(previews)
        queue.add(sample_files[:1])
        queue.add(sample_files[1:])

        assert queue.files == sample_files


class TestUploadQueueRemove:
    """Tests for removing items."""

    def test_remove_pending_releases_preview_once(self, sample_files: list[OutgoingFile]) -> None:
        previews = RecordingPreviewStore()
        queue = UploadQueue(previews)
        _, png, _ = queue.add(sample_files)
        url = png.preview_url

        removed = queue.remove(png.id)

        check.is_true(removed)
        check.equal(previews.released, [url])
        check.equal(len(previews), 0)
        check.equal([i.file.name for i in queue.items], ["report.pdf", "notes.txt"])

    def test_remove_non_pending_is_noop(self, sample_files: list[OutgoingFile]) -> None:
        """Items already sent stay in the queue and keep their preview."""
        previews = RecordingPreviewStore()
        queue = UploadQueue(previews)
        _, png, _ = queue.add(sample_files)
        queue.mark_uploading()

        removed = queue.remove(png.id)

        check.is_false(removed)
        check.equal(len(queue), 3)
        check.equal(previews.released, [])
        check.is_in(png.preview_url, previews)

    def test_remove_unknown_id_is_noop(self, previews: PreviewStore, sample_files: list[OutgoingFile]) -> None:
        queue = UploadQueue(previews)
        queue.add(sample_files)

        check.is_false(queue.remove("missing"))
        check.equal(len(queue), 3)

    def test_remove_without_preview(self, sample_files: list[OutgoingFile]) -> None:
        previews = RecordingPreviewStore()
        queue = UploadQueue(previews)
        pdf, _, _ = queue.add(sample_files)

        check.is_true(queue.remove(pdf.id))
        check.equal(previews.released, [])


class TestUploadQueueTransitions:
    """Tests for batch status changes and clearing."""

    def test_batch_moves_together(self, previews: PreviewStore, sample_files: list[OutgoingFile]) -> None:
        queue = UploadQueue(previews)
        queue.add(sample_files)

        queue.mark_uploading()
        check.is_true(all(i.status is UploadStatus.UPLOADING for i in queue.items))

        queue.mark_all(UploadStatus.ERROR)
        check.is_true(all(i.status is UploadStatus.ERROR for i in queue.items))

    def test_clear_releases_every_preview_once(self) -> None:
        previews = RecordingPreviewStore()
        queue = UploadQueue(previews)
        images = [
            OutgoingFile(name=f"img{i}.jpg", mime_type="image/jpeg", content=b"jpg")
            for i in range(2)
        ]
        urls = [item.preview_url for item in queue.add(images)]

        queue.clear()
        queue.clear()

        check.equal(previews.released, urls)
        check.equal(len(queue), 0)
        check.equal(len(previews), 0)


class TestPreviewStore:
    """Tests for preview bookkeeping."""

    def test_create_and_release(self, previews: PreviewStore) -> None:
        file = OutgoingFile(name="a.webp", mime_type="image/webp", content=b"webp")

        url = previews.create(file)
        token = url.rsplit("/", 1)[-1]

        check.is_true(url.startswith("/previews/"))
        check.equal(previews.get(token), (b"webp", "image/webp"))
        check.is_true(previews.release(url))
        check.is_false(previews.release(url))
        check.is_none(previews.get(token))

    def test_tokens_are_unique(self, previews: PreviewStore) -> None:
        file = OutgoingFile(name="a.png", mime_type="image/png", content=b"png")

        assert previews.create(file) != previews.create(file)
