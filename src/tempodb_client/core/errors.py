"""Error types."""

from __future__ import annotations


class TempoDBError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.code = code


class TempoDBValidationError(TempoDBError):
    """Invalid constructor or call arguments."""


class TempoDBClientClosedError(TempoDBError):
    """Raised when client is used after close."""


class TempoDBTransportError(TempoDBError):
    """Network/transport-level failure surfaced after retries are exhausted."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        code: str | None = None,
        url: str | None = None,
        attempts: int = 1,
    ) -> None:
        super().__init__(message, http_status=http_status, code=code)
        self.url = url
        self.attempts = attempts


__all__ = [
    "TempoDBError",
    "TempoDBValidationError",
    "TempoDBClientClosedError",
    "TempoDBTransportError",
]
