"""One chat turn: record the user message, call the webhook, record the reply.

A turn is split in two so the UI can render the user message and a typing
indicator before the webhook answers.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from webhook_chat.models.schemas import ChatMessage, OutgoingFile, WebhookConfig
from webhook_chat.state.conversation import Conversation
from webhook_chat.transport.client import WebhookClient
from webhook_chat.transport.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingTurn:
    """A user message that has been recorded but not yet answered."""

    message: ChatMessage
    files: tuple[OutgoingFile, ...]
    history: list[dict[str, str]]


class ChatService:
    """Runs chat turns against the configured chat webhook.

    Args:
        client: Webhook client used for the call.
        get_config: Returns the current webhook config; read on every turn so
            a saved change applies to the next message.
        conversation: Transcript to append to; a new one if omitted.
    """

    def __init__(
        self,
        client: WebhookClient,
        get_config: Callable[[], WebhookConfig],
        conversation: Conversation | None = None,
    ) -> None:
        self._client = client
        self._get_config = get_config
        self.conversation = conversation or Conversation()

    def start_turn(self, text: str, files: Sequence[OutgoingFile] = ()) -> PendingTurn | None:
        """Append the user message and mark the conversation as waiting.

        Returns:
            The pending turn, or None if the turn is empty or another turn
            is still outstanding.
        """
        text = text.strip()
        if (not text and not files) or self.conversation.is_waiting:
            return None

        message = self.conversation.append_user(text, files)
        history = self.conversation.history(before=message)
        self.conversation.is_waiting = True
        return PendingTurn(message=message, files=tuple(files), history=history)

    async def finish_turn(self, turn: PendingTurn) -> ChatMessage:
        """Call the chat webhook and append its reply or the error."""
        try:
            reply = await self._client.submit_chat_turn(
                self._get_config().chat_url, turn.message.content, turn.history, turn.files
            )
        except TransportError as e:
            logger.warning(f"Chat turn failed: {e.message}")
            return self.conversation.append_error(e)
        finally:
            self.conversation.is_waiting = False

        return self.conversation.append_reply(reply)

    async def send(self, text: str, files: Sequence[OutgoingFile] = ()) -> ChatMessage | None:
        """Run a whole turn.

        Returns:
            The appended assistant message, or None if nothing was sent.
        """
        turn = self.start_turn(text, files)
        if turn is None:
            return None
        return await self.finish_turn(turn)
