"""Ingestion batches: send every queued file plus context in one request."""

import asyncio
import logging
from collections.abc import Callable

from webhook_chat.models.schemas import UploadReport, UploadStatus, WebhookConfig
from webhook_chat.state.upload_queue import UploadQueue
from webhook_chat.transport.client import WebhookClient, require_url
from webhook_chat.transport.errors import TransportError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Success! Files and context sent to the ingestion webhook."


class IngestionService:
    """Submits the upload queue and text context to the ingestion webhook.

    The remote response is all-or-nothing: every item in the batch ends up
    with the same status.
    """

    def __init__(
        self,
        client: WebhookClient,
        get_config: Callable[[], WebhookConfig],
        queue: UploadQueue,
    ) -> None:
        self._client = client
        self._get_config = get_config
        self.queue = queue
        self.text_context: str = ""
        self.is_processing: bool = False
        self.report: UploadReport | None = None

    @property
    def can_submit(self) -> bool:
        # A successful batch stays on screen until cleared and is not resent
        if self.is_processing or (self.report is not None and self.report.success):
            return False
        return bool(self.queue) or bool(self.text_context.strip())

    async def submit(self) -> UploadReport | None:
        """Send the current batch.

        Returns:
            The outcome banner, or None if there was nothing to send or a
            batch is already in flight.

        Raises:
            ConfigError: If no ingestion URL is configured. The queue is
                left untouched.
        """
        if not self.can_submit:
            return None

        url = require_url(self._get_config().ingestion_url, "Ingestion")

        self.is_processing = True
        self.report = None
        self.queue.mark_uploading()
        try:
            await self._client.submit_ingestion(url, self.queue.files, self.text_context)
        except TransportError as e:
            logger.error(f"Upload of {len(self.queue)} file(s) failed: {e.message}")
            self.queue.mark_all(UploadStatus.ERROR)
            message = e.display_text if e.hint else f"Failed to upload: {e.message}"
            self.report = UploadReport(success=False, message=message)
        else:
            logger.info(f"Uploaded {len(self.queue)} file(s) to ingestion webhook")
            self.queue.mark_all(UploadStatus.SUCCESS)
            self.report = UploadReport(success=True, message=SUCCESS_MESSAGE)
        finally:
            self.is_processing = False

        return self.report

    def reset(self) -> None:
        """Clear the queue, its previews, the context and the banner."""
        self.queue.clear()
        self.text_context = ""
        self.report = None

    async def clear_later(self, delay: float) -> None:
        """Reset after ``delay`` seconds so the confirmation stays readable."""
        await asyncio.sleep(delay)
        self.reset()
