"""Typed failures of webhook calls.

Every failed call raises exactly one of these. A malformed response body is
not a failure; see ``parse_response``.
"""

# Substring of a remote error message -> advice shown with the error.
REMEDIATION_HINTS: tuple[tuple[str, str], ...] = (
    (
        "Unused Respond to Webhook node",
        "N8N CONFIG ERROR: Open your N8N Webhook Node and change 'Respond' "
        "to 'Using Respond to Webhook Node'.",
    ),
)


def remediation_hint(message: str) -> str | None:
    """Return the advice for the first known substring in ``message``."""
    for needle, hint in REMEDIATION_HINTS:
        if needle in message:
            return hint
    return None


class TransportError(Exception):
    """Base class for webhook call failures.

    Attributes:
        message: Normalized error text.
        hint: Optional remediation advice matched from the message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.hint = remediation_hint(message)

    @property
    def display_text(self) -> str:
        if self.hint:
            return f"{self.message}\n\nFIX: {self.hint}"
        return self.message


class ConfigError(TransportError):
    """Raised when the target webhook URL is not configured."""

    pass


class NetworkError(TransportError):
    """Raised when the request could not be completed."""

    pass


class RemoteError(TransportError):
    """Raised when the webhook answers with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
