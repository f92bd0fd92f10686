"""Append-only chat transcript."""

from collections.abc import Sequence

from webhook_chat.models.schemas import ChatMessage, MessageRole, OutgoingFile
from webhook_chat.transport.errors import TransportError


class Conversation:
    """Ordered log of chat messages for one browser session.

    Messages are only ever appended; insertion order is display order.
    ``is_waiting`` is set while a user turn awaits its reply.
    """

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self.is_waiting: bool = False

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def _append(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        return message

    def append_user(self, text: str, files: Sequence[OutgoingFile] = ()) -> ChatMessage:
        return self._append(
            ChatMessage(
                role=MessageRole.USER,
                content=text,
                attachments=tuple(f.attachment_meta() for f in files),
            )
        )

    def append_reply(self, text: str) -> ChatMessage:
        return self._append(ChatMessage(role=MessageRole.ASSISTANT, content=text))

    def append_error(self, error: TransportError) -> ChatMessage:
        """Record a failed turn as an error-flagged assistant message."""
        return self._append(
            ChatMessage(role=MessageRole.ASSISTANT, content=error.display_text, is_error=True)
        )

    def history(self, before: ChatMessage | None = None) -> list[dict[str, str]]:
        """Return messages as ``{role, content}`` dicts, stopping at ``before``."""
        turns: list[dict[str, str]] = []
        for message in self._messages:
            if before is not None and message.id == before.id:
                break
            turns.append({"role": message.role.value, "content": message.content})
        return turns
