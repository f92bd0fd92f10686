"""Webhook transport: multipart requests and response normalization.

Responsibilities:
    - Multipart bodies with duplicated text fields, session ids, and
      per-file binary and metadata parts
    - One POST per operation through HTTPX
    - Normalizing JSON or plain-text replies into a single string
    - Typed errors with optional remediation hints
"""

from webhook_chat.transport.client import WebhookClient, require_url
from webhook_chat.transport.errors import (
    ConfigError,
    NetworkError,
    RemoteError,
    TransportError,
)
from webhook_chat.transport.multipart import MultipartBody, build_multipart, session_id
from webhook_chat.transport.responses import parse_response

__all__ = [
    "ConfigError",
    "MultipartBody",
    "NetworkError",
    "RemoteError",
    "TransportError",
    "WebhookClient",
    "build_multipart",
    "parse_response",
    "require_url",
    "session_id",
]
