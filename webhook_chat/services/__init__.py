"""Services that turn webhook results into state changes.

Responsibilities:
    - ChatService: one chat turn, reply or error appended to the transcript
    - IngestionService: one upload batch, statuses and result banner

Keeps the UI free of transport details.
"""

from webhook_chat.services.chat_service import ChatService
from webhook_chat.services.ingestion_service import IngestionService

__all__ = ["ChatService", "IngestionService"]
