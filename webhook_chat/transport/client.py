"""HTTPX client for the ingestion and chat webhooks.

Each operation issues exactly one POST with no retries; redirects are
followed. Failures surface as TransportError subclasses; nothing is
swallowed here.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import date

import httpx

from webhook_chat.models.schemas import OutgoingFile
from webhook_chat.transport.errors import ConfigError, NetworkError, RemoteError
from webhook_chat.transport.multipart import (
    CHAT_SESSION_PREFIX,
    HISTORY_FIELD,
    INGESTION_SESSION_PREFIX,
    MultipartBody,
    build_multipart,
    encode_history,
    session_id,
)
from webhook_chat.transport.responses import parse_response

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0


def require_url(url: str, label: str) -> str:
    """Return ``url`` stripped, or raise ConfigError if it is blank."""
    if not url or not url.strip():
        raise ConfigError(f"{label} Webhook URL is not configured.")
    return url.strip()


class WebhookClient:
    """Posts multipart payloads to workflow webhooks.

    Args:
        timeout: Seconds to wait for a webhook response.
        transport: Optional HTTPX transport, e.g. an ASGITransport in tests.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def _post(self, url: str, body: MultipartBody) -> str:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport, follow_redirects=True
        ) as client:
            try:
                response = await client.post(url, files=body.to_httpx_files())
            # InvalidURL is not a RequestError
            except (httpx.RequestError, httpx.InvalidURL) as e:
                logger.error(f"Webhook request to {url} failed: {e!r}")
                raise NetworkError(f"Connection failed: {e}") from e

        logger.info(f"Webhook {url} answered {response.status_code}")
        try:
            return parse_response(response.status_code, response.text, response.reason_phrase)
        except RemoteError as e:
            logger.warning(f"Webhook {url} returned error {e.status_code}: {e.message}")
            raise

    async def submit_ingestion(
        self,
        url: str,
        files: Sequence[OutgoingFile],
        text_context: str = "",
        day: date | None = None,
    ) -> None:
        """Send files and context to the ingestion webhook.

        Any 2xx response counts as success; its body is ignored.

        Raises:
            ConfigError: If ``url`` is blank. No request is made.
            NetworkError: If the request could not be completed.
            RemoteError: If the webhook returned a non-success status.
        """
        target = require_url(url, "Ingestion")
        body = build_multipart(
            text_context or "", session_id(INGESTION_SESSION_PREFIX, day), files
        )
        logger.info(f"Submitting {len(files)} file(s) for ingestion")
        await self._post(target, body)

    async def submit_chat_turn(
        self,
        url: str,
        message: str,
        history: Sequence[Mapping[str, str]] = (),
        files: Sequence[OutgoingFile] = (),
        day: date | None = None,
    ) -> str:
        """Send one chat turn and return the assistant's reply.

        Args:
            url: Chat webhook URL.
            message: The user's message.
            history: Prior turns as ``{role, content}`` mappings.
            files: Files attached to this turn.
            day: Calendar day for the session id; today if omitted.

        Returns:
            The normalized reply text.

        Raises:
            ConfigError: If ``url`` is blank. No request is made.
            NetworkError: If the request could not be completed.
            RemoteError: If the webhook returned a non-success status.
        """
        target = require_url(url, "Chat")
        body = build_multipart(
            message,
            session_id(CHAT_SESSION_PREFIX, day),
            files,
            extra_fields={HISTORY_FIELD: encode_history(history)},
        )
        return await self._post(target, body)
