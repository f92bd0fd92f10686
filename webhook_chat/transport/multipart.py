"""Multipart payloads for workflow webhooks.

One request body carries the text, a session id, each file as its own binary
part followed by a JSON metadata part, and the file count. Consumers read the
metadata parts as a repeated field and match them to binary parts by ``key``.
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

from webhook_chat.models.schemas import FileMetadata, OutgoingFile

MESSAGE_FIELD = "message"
# Older workflow templates read the text from here instead
LEGACY_MESSAGE_FIELD = "chatInput"
SESSION_FIELD = "sessionId"
HISTORY_FIELD = "history"
METADATA_FIELD = "file_metadata"
COUNT_FIELD = "file_count"

INGESTION_SESSION_PREFIX = "ingestion-"
CHAT_SESSION_PREFIX = "session-"


def file_key(index: int) -> str:
    return f"file_{index}"


def session_id(prefix: str, day: date | None = None) -> str:
    """Return the correlation id shared by all calls of one context and day.

    Args:
        prefix: Context marker, e.g. ``"session-"`` for chat.
        day: Calendar day; today if omitted.

    Returns:
        Id such as ``"session-Fri Oct 16 2026"``.
    """
    day = day or date.today()
    return f"{prefix}{day.strftime('%a %b %d %Y')}"


@dataclass(frozen=True)
class TextPart:
    name: str
    value: str


@dataclass(frozen=True)
class BinaryPart:
    name: str
    file: OutgoingFile


Part = TextPart | BinaryPart


@dataclass
class MultipartBody:
    """Ordered parts of one multipart/form-data request."""

    parts: list[Part] = field(default_factory=list)

    def add_text(self, name: str, value: str) -> None:
        self.parts.append(TextPart(name, value))

    def add_file(self, name: str, file: OutgoingFile) -> None:
        self.parts.append(BinaryPart(name, file))

    def values(self, name: str) -> list[str]:
        """Return every text value sent under ``name``, in order."""
        return [p.value for p in self.parts if isinstance(p, TextPart) and p.name == name]

    @property
    def binary_parts(self) -> list[BinaryPart]:
        return [p for p in self.parts if isinstance(p, BinaryPart)]

    @property
    def metadata_parts(self) -> list[FileMetadata]:
        return [FileMetadata.model_validate_json(v) for v in self.values(METADATA_FIELD)]

    def to_httpx_files(self) -> list[tuple[str, tuple]]:
        """Render the parts for ``httpx`` in their original order.

        Text parts go through ``files`` with no filename so HTTPX emits them
        as plain form fields and keeps them interleaved with the files.
        """
        rendered: list[tuple[str, tuple]] = []
        for part in self.parts:
            if isinstance(part, TextPart):
                rendered.append((part.name, (None, part.value.encode("utf-8"))))
            else:
                rendered.append(
                    (part.name, (part.file.name, part.file.content, part.file.mime_type))
                )
        return rendered


def build_multipart(
    message: str,
    session: str,
    files: Sequence[OutgoingFile] = (),
    extra_fields: Mapping[str, str] | None = None,
) -> MultipartBody:
    """Build the request body shared by ingestion and chat calls.

    Args:
        message: User-visible text, sent under both text field names.
        session: Session identifier from ``session_id``.
        files: Files in selection order.
        extra_fields: Additional text fields placed before the files.

    Returns:
        MultipartBody ready to post.
    """
    body = MultipartBody()
    body.add_text(MESSAGE_FIELD, message)
    body.add_text(LEGACY_MESSAGE_FIELD, message)
    body.add_text(SESSION_FIELD, session)

    for name, value in (extra_fields or {}).items():
        body.add_text(name, value)

    for index, file in enumerate(files):
        key = file_key(index)
        body.add_file(key, file)
        metadata = FileMetadata.for_file(file, key)
        body.add_text(METADATA_FIELD, metadata.model_dump_json(by_alias=True))

    body.add_text(COUNT_FIELD, str(len(files)))
    return body


def encode_history(history: Sequence[Mapping[str, str]]) -> str:
    """Serialize prior turns as a JSON list of ``{role, content}``."""
    return json.dumps([{"role": h["role"], "content": h["content"]} for h in history])
