"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import TempoDBClientConfig
from .encoding import encode_path, encode_query_params
from .errors import TempoDBTransportError, TempoDBValidationError
from .models import HTTP_METHODS

logger = logging.getLogger("tempodb_client")

RETRY_COUNT_PARAM = "retry_count"
MAX_RETRIES_PARAM = "max_retries"


@dataclass(slots=True, frozen=True)
class PreparedRequest:
    method: str
    url: str
    content: bytes
    first_attempt: int
    max_retries: int


def build_default_headers(config: TempoDBClientConfig) -> Mapping[str, str]:
    return {
        "Host": config.host,
        "Connection": "keep-alive",
        "User-Agent": config.user_agent,
        "Content-Type": "application/json",
    }


def build_default_timeout(config: TempoDBClientConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout_seconds)


def build_default_limits(config: TempoDBClientConfig) -> httpx.Limits:
    return httpx.Limits(
        max_connections=config.max_sockets,
        max_keepalive_connections=config.max_sockets,
    )


def build_client_options(config: TempoDBClientConfig) -> dict[str, Any]:
    """Keyword arguments shared by ``httpx.Client`` and ``httpx.AsyncClient``."""

    return {
        "headers": build_default_headers(config),
        "auth": httpx.BasicAuth(config.key, config.secret),
        "timeout": build_default_timeout(config),
        "limits": build_default_limits(config),
        "follow_redirects": False,
    }


def build_url(
    config: TempoDBClientConfig,
    path: str,
    query_params: Mapping[str, object] | None,
) -> str:
    url = f"{config.base_url}/{config.version}{encode_path(path)}"
    query = encode_query_params(query_params)
    if query:
        url = f"{url}?{query}"
    return url


def encode_body(body: Any) -> bytes:
    """Serialize ``body`` as JSON; ``None`` becomes an empty object."""

    try:
        return json.dumps(body if body is not None else {}, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise TempoDBValidationError(f"body is not JSON serializable: {exc}") from exc


def validate_call(method: object, path: object) -> str:
    """Return the upper-cased verb or raise ``TempoDBValidationError``."""

    if not isinstance(method, str) or not method:
        raise TempoDBValidationError("method must be a non-empty string")
    if not isinstance(path, str) or not path:
        raise TempoDBValidationError("path must be a non-empty string")
    normalized_method = method.upper()
    if normalized_method not in HTTP_METHODS:
        raise TempoDBValidationError(f"unsupported HTTP method: {method}")
    return normalized_method


def prepare_request(
    config: TempoDBClientConfig,
    method: str,
    path: str,
    query_params: Mapping[str, Any] | None,
    body: Any,
    *,
    max_retries: int | None = None,
) -> PreparedRequest:
    """Validate call arguments and split retry control fields from query fields."""

    normalized_method = validate_call(method, path)
    params = dict(query_params) if query_params else {}
    retry_count = params.pop(RETRY_COUNT_PARAM, None)
    param_max_retries = params.pop(MAX_RETRIES_PARAM, None)

    resolved_max_retries = config.max_retries
    if _is_count(param_max_retries):
        resolved_max_retries = param_max_retries
    if _is_count(max_retries):
        resolved_max_retries = max_retries
    first_attempt = retry_count if _is_count(retry_count) else 0

    return PreparedRequest(
        method=normalized_method,
        url=build_url(config, path, params or None),
        content=encode_body(body),
        first_attempt=first_attempt,
        max_retries=max(0, resolved_max_retries),
    )


def status_from_error(exc: BaseException) -> int | None:
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def log_transport_error(
    prepared: PreparedRequest,
    *,
    attempt: int,
    http_status: int | None,
    exc: Exception,
) -> None:
    logger.warning(
        "request error url=%s attempt=%s status=%s code=%s error=%s",
        prepared.url,
        attempt,
        http_status,
        exc.__class__.__name__,
        exc,
    )


def build_transport_error(
    prepared: PreparedRequest,
    *,
    attempt: int,
    http_status: int | None,
    exc: Exception,
) -> TempoDBTransportError:
    attempts = attempt - prepared.first_attempt + 1
    logger.error(
        "request failed; giving up url=%s attempts=%s status=%s code=%s",
        prepared.url,
        attempts,
        http_status,
        exc.__class__.__name__,
    )
    return TempoDBTransportError(
        f"{prepared.method} {prepared.url} failed: {exc}",
        http_status=http_status,
        code=exc.__class__.__name__,
        url=prepared.url,
        attempts=attempts,
    )


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


__all__ = [
    "RETRY_COUNT_PARAM",
    "MAX_RETRIES_PARAM",
    "PreparedRequest",
    "build_default_headers",
    "build_default_timeout",
    "build_default_limits",
    "build_client_options",
    "build_url",
    "encode_body",
    "validate_call",
    "prepare_request",
    "status_from_error",
    "log_transport_error",
    "build_transport_error",
]
