"""Normalization of webhook responses.

Workflow endpoints answer with a JSON object, a bare JSON string, or plain
text, depending on how the remote workflow was built. All of these collapse
into one reply string, or one RemoteError for a non-success status.
"""

import json
from typing import Any

import httpx

from webhook_chat.transport.errors import RemoteError

# Checked in order, first non-empty string wins
REPLY_FIELDS: tuple[str, ...] = ("output", "text", "message")
ERROR_MESSAGE_FIELDS: tuple[str, ...] = ("errorMessage", "message", "error")


def first_text_field(data: dict[str, Any], candidates: tuple[str, ...]) -> str | None:
    """Return the first candidate key holding a non-empty string."""
    for name in candidates:
        value = data.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def _compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _reply_from_json(data: Any) -> str:
    # "All incoming items" mode wraps a single result in a list
    if isinstance(data, list) and len(data) == 1:
        data = data[0]

    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        return first_text_field(data, REPLY_FIELDS) or _compact_json(data)
    return _compact_json(data)


def _status_text(status_code: int, reason_phrase: str | None) -> str:
    return reason_phrase or httpx.codes.get_reason_phrase(status_code) or f"HTTP {status_code}"


def parse_response(status_code: int, body_text: str, reason_phrase: str | None = None) -> str:
    """Turn a webhook response into reply text.

    Args:
        status_code: HTTP status of the response.
        body_text: Decoded response body.
        reason_phrase: Status text sent by the server, if any.

    Returns:
        The reply text. Non-JSON bodies are returned verbatim, so an empty
        body is an empty reply.

    Raises:
        RemoteError: If the status is not 2xx. Its message is the error field
            of a JSON body, or the status text.
    """
    try:
        data = json.loads(body_text)
        parsed = True
    except ValueError:
        data = None
        parsed = False

    if not 200 <= status_code < 300:
        message = None
        if parsed and isinstance(data, dict):
            message = first_text_field(data, ERROR_MESSAGE_FIELDS)
        raise RemoteError(message or _status_text(status_code, reason_phrase), status_code)

    if not parsed:
        return body_text
    return _reply_from_json(data)
