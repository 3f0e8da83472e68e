"""Async HTTP transport with timing and transport-error retry."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Callable, Protocol

import httpx

from ..config import TempoDBClientConfig
from .errors import TempoDBTransportError
from .metrics import ProcessTimeMetrics
from .models import QueryResult
from .response_parsing import parse_response_body
from .retry import RetryPolicy, can_retry, retry_on_any_error
from .transport_shared import (
    build_client_options,
    build_transport_error,
    log_transport_error,
    prepare_request,
    status_from_error,
)

logger = logging.getLogger("tempodb_client")


class AsyncTransportClient(Protocol):
    async def request(self, method: str, url: str, *, content: bytes | None = None) -> Any: ...
    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous Request Executor for the TempoDB API."""

    def __init__(
        self,
        config: TempoDBClientConfig,
        *,
        client: AsyncTransportClient | None = None,
        metrics: ProcessTimeMetrics | None = None,
        retry_policy: RetryPolicy | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or time.perf_counter
        self._retry_policy = retry_policy or retry_on_any_error
        self.metrics = metrics or ProcessTimeMetrics()
        self._closed = False

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(**build_client_options(config))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

    async def call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> QueryResult:
        if self._closed:
            raise TempoDBTransportError("transport is already closed")

        prepared = prepare_request(
            self._config,
            method,
            path,
            query_params,
            body,
            max_retries=max_retries,
        )
        attempt = prepared.first_attempt
        last_status: int | None = None

        while True:
            logger.debug(
                "request start method=%s url=%s attempt=%s",
                prepared.method,
                prepared.url,
                attempt,
            )
            started_at = self._clock()
            try:
                response = await self._client.request(
                    prepared.method,
                    prepared.url,
                    content=prepared.content,
                )
            except Exception as exc:
                self.metrics.record(prepared.method, self._clock() - started_at)
                last_status = status_from_error(exc) or last_status
                log_transport_error(prepared, attempt=attempt, http_status=last_status, exc=exc)
                if self._retry_policy(exc) and can_retry(
                    attempt=attempt,
                    max_retries=prepared.max_retries,
                ):
                    attempt += 1
                    logger.warning(
                        "retrying url=%s retry_count=%s max_retries=%s",
                        prepared.url,
                        attempt,
                        prepared.max_retries,
                    )
                    continue
                raise build_transport_error(
                    prepared,
                    attempt=attempt,
                    http_status=last_status,
                    exc=exc,
                ) from exc

            elapsed = self._clock() - started_at
            self.metrics.record(prepared.method, elapsed)
            logger.info(
                "request complete method=%s url=%s status=%s elapsed=%.3fs",
                prepared.method,
                prepared.url,
                response.status_code,
                elapsed,
            )
            return QueryResult(
                response=response.status_code,
                body=parse_response_body(response),
            )


__all__ = [
    "AsyncTransport",
]
