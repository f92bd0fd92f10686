"""Pydantic models for webhook configuration, chat and uploads.

Provides type safety and validation for everything the UI and the
transport layer exchange.

Models:
    - WebhookConfig: Ingestion and chat endpoint URLs
    - ChatMessage: Individual message in the transcript
    - AttachmentMeta: Name, type and size of an attached file
    - OutgoingFile: File bytes selected for sending
    - FileMetadata: Wire form of a file metadata part
    - UploadItem: Queued file with status and preview
    - UploadReport: Result banner of an ingestion batch
"""

from webhook_chat.models.schemas import (
    SUPPORTED_MIME_TYPES,
    AttachmentMeta,
    ChatMessage,
    FileKind,
    FileMetadata,
    MessageRole,
    OutgoingFile,
    UploadItem,
    UploadReport,
    UploadStatus,
    WebhookConfig,
)

__all__ = [
    "SUPPORTED_MIME_TYPES",
    "AttachmentMeta",
    "ChatMessage",
    "FileKind",
    "FileMetadata",
    "MessageRole",
    "OutgoingFile",
    "UploadItem",
    "UploadReport",
    "UploadStatus",
    "WebhookConfig",
]
