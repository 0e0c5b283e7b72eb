"""Custom exception hierarchy for pyweelo."""

from __future__ import annotations

#: Message used when a failure carries no text of its own.
GENERIC_ERROR_MESSAGE = "Network error"


class WeeloError(Exception):
    """Base exception for all pyweelo errors."""


class WeeloConfigError(WeeloError):
    """Invalid or missing configuration."""


class WeeloTransportError(WeeloError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class WeeloApiError(WeeloError):
    """Envelope reported ``success=false`` or carried a malformed payload."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        http_status: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.http_status = http_status
        self.endpoint = endpoint
        super().__init__(message)


class WeeloNotFoundError(WeeloApiError):
    """Envelope reported success but carried no payload for the resource.

    Propagates exactly like any other fetch failure; only the message
    differs so screens can tell "nothing there" from "request failed".
    """


def error_message(exc: BaseException) -> str:
    """Return the user-facing message for a fetch failure."""
    text = str(exc).strip()
    return text or GENERIC_ERROR_MESSAGE
