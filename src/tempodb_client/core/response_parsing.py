"""Shared response body decoding for sync/async transports."""

from __future__ import annotations

from typing import Any, Protocol


class BodyResponse(Protocol):
    status_code: int

    @property
    def text(self) -> str: ...

    def json(self) -> Any: ...


def parse_response_body(response: BodyResponse) -> Any:
    """Decode a JSON body, falling back to raw text; an empty body yields ``None``."""

    try:
        return response.json()
    except ValueError:
        text = getattr(response, "text", None)
        return text or None


__all__ = [
    "parse_response_body",
]
