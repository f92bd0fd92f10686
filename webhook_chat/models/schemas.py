import time
import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SUPPORTED_MIME_TYPES: dict[str, str] = {
    "application/pdf": "PDF",
    "text/plain": "TXT",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "application/msword": "DOC",
    "image/png": "PNG",
    "image/jpeg": "JPG",
    "image/webp": "WEBP",
    "audio/mpeg": "MP3",
    "audio/wav": "WAV",
    "video/mp4": "MP4",
    "video/webm": "WEBM",
}

DOCUMENT_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


def new_id() -> str:
    return uuid.uuid4().hex


def now_millis() -> int:
    return int(time.time() * 1000)


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class UploadStatus(str, Enum):
    """Lifecycle of a queued upload item."""

    PENDING = "pending"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


class FileKind(str, Enum):
    """Display category of a file, derived from its MIME type."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    OTHER = "other"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "FileKind":
        if mime_type.startswith("image/"):
            return cls.IMAGE
        if mime_type.startswith("video/"):
            return cls.VIDEO
        if mime_type.startswith("audio/"):
            return cls.AUDIO
        if mime_type.startswith("text/") or mime_type in DOCUMENT_MIME_TYPES:
            return cls.DOCUMENT
        return cls.OTHER


class WebhookConfig(BaseModel):
    """The two webhook endpoints. An empty string means not configured.

    Attributes:
        ingestion_url: Endpoint that receives documents and context.
        chat_url: Endpoint that answers chat turns.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ingestion_url: str = ""
    chat_url: str = ""

    @field_validator("ingestion_url", "chat_url", mode="before")
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Strip whitespace so a blank URL reads as unset."""
        if isinstance(v, str):
            return v.strip()
        return v


class AttachmentMeta(BaseModel):
    """Descriptor of a file attached to a chat message.

    Attributes:
        name: Original file name.
        mime_type: Declared content type.
        size_bytes: File size in bytes.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    size_bytes: int = Field(ge=0)


class OutgoingFile(BaseModel):
    """An in-memory file selected by the user, ready to be posted."""

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str = "application/octet-stream"
    content: bytes = Field(repr=False)

    @field_validator("mime_type", mode="before")
    @classmethod
    def default_mime_type(cls, v: str | None) -> str:
        """Browsers report unknown types as an empty string."""
        return v or "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def kind(self) -> FileKind:
        return FileKind.from_mime_type(self.mime_type)

    def attachment_meta(self) -> AttachmentMeta:
        return AttachmentMeta(
            name=self.name, mime_type=self.mime_type, size_bytes=self.size_bytes
        )


class FileMetadata(BaseModel):
    """Wire form of one ``file_metadata`` part.

    Serialized with camelCase keys: ``{name, mimeType, sizeBytes, key}``.
    ``key`` names the binary part the metadata describes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    mime_type: str
    size_bytes: int = Field(ge=0)
    key: str

    @classmethod
    def for_file(cls, file: OutgoingFile, key: str) -> "FileMetadata":
        return cls(name=file.name, mime_type=file.mime_type, size_bytes=file.size_bytes, key=key)


class ChatMessage(BaseModel):
    """A single message in the transcript. Immutable once created.

    Attributes:
        id: Unique message identifier.
        role: The speaker (user, assistant, or system).
        content: The message text.
        timestamp: Creation time in epoch milliseconds.
        is_error: Whether this message reports a failed turn.
        attachments: Files sent along with the message.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    role: MessageRole
    content: str
    timestamp: int = Field(default_factory=now_millis)
    is_error: bool = False
    attachments: tuple[AttachmentMeta, ...] = ()


class UploadItem(BaseModel):
    """A file waiting in (or sent from) the upload queue.

    Attributes:
        id: Unique item identifier.
        file: The selected file.
        preview_url: Served image preview, only for image files.
        status: Current upload status.
        kind: Display category of the file.
    """

    id: str = Field(default_factory=new_id)
    file: OutgoingFile
    preview_url: str | None = None
    status: UploadStatus = UploadStatus.PENDING
    kind: FileKind = FileKind.OTHER


class UploadReport(BaseModel):
    """Outcome banner for one ingestion batch.

    Attributes:
        success: Whether the webhook accepted the batch.
        message: Text shown to the user.
    """

    success: bool
    message: str
