"""Custom exception hierarchy for pypgn."""

from __future__ import annotations


class PgnError(Exception):
    """Base exception for all pypgn errors."""


class PgnConfigError(PgnError):
    """Invalid or missing configuration (rule set, environment)."""


class PgnDecodeError(PgnError):
    """Analyzer payload could not be turned into a decoded message."""


class PgnTransportError(PgnError):
    """HTTP-level failure talking to the Signal K server (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
