"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

from .client_shared import needs_split, resolve_config
from .config import TempoDBClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import TempoDBClientClosedError
from .core.metrics import ProcessTimeMetrics, ProcessTimeSnapshot
from .core.models import QueryResult, RequestDescriptor, SplitAggregate
from .core.retry import RetryPolicy
from .series import endpoints
from .series.async_splitter import AsyncKeySetSplitter
from .series.endpoints import Timestamp


class AsyncTempoDBClient:
    """Public async TempoDB API client."""

    def __init__(
        self,
        key: str | None = None,
        secret: str | None = None,
        *,
        config: TempoDBClientConfig | None = None,
        transport: AsyncTransport | None = None,
        metrics: ProcessTimeMetrics | None = None,
        retry_policy: RetryPolicy | None = None,
        **options: Any,
    ) -> None:
        self._config = resolve_config(key=key, secret=secret, config=config, options=options)
        self._transport = transport or AsyncTransport(
            self._config,
            metrics=metrics,
            retry_policy=retry_policy,
        )
        self._splitter = AsyncKeySetSplitter(self._transport)
        self._closed = False

    @property
    def config(self) -> TempoDBClientConfig:
        return self._config

    @property
    def process_time(self) -> ProcessTimeSnapshot:
        return self._transport.metrics.snapshot()

    def _ensure_open(self) -> None:
        if self._closed:
            raise TempoDBClientClosedError("AsyncTempoDBClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncTempoDBClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False

    async def call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> QueryResult:
        self._ensure_open()
        return await self._transport.call(
            method,
            path,
            query_params,
            body,
            max_retries=max_retries,
        )

    async def split(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any],
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> SplitAggregate:
        self._ensure_open()
        return await self._splitter.split(
            method,
            path,
            query_params,
            body,
            max_retries=max_retries,
        )

    async def _dispatch(self, descriptor: RequestDescriptor) -> QueryResult | SplitAggregate:
        if needs_split(descriptor):
            return await self.split(
                descriptor.method,
                descriptor.path,
                descriptor.query_params or {},
                descriptor.body,
                max_retries=descriptor.max_retries,
            )
        return await self.call(
            descriptor.method,
            descriptor.path,
            descriptor.query_params,
            descriptor.body,
            max_retries=descriptor.max_retries,
        )

    async def create_series(self, key: str | None = None) -> QueryResult:
        return await self._dispatch(endpoints.create_series(key))

    async def get_series(self, options: Mapping[str, Any] | None = None) -> QueryResult:
        return await self._dispatch(endpoints.get_series(options or {}))

    async def delete_series(self, options: Mapping[str, Any] | None = None) -> QueryResult:
        return await self._dispatch(endpoints.delete_series(options or {}))

    async def update_series(
        self,
        series_id: str,
        series_key: str | None = None,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        tags: Sequence[str] | None = None,
    ) -> QueryResult:
        return await self._dispatch(
            endpoints.update_series(series_id, series_key, name, attributes, tags)
        )

    async def read(
        self,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult | SplitAggregate:
        return await self._dispatch(endpoints.read(start, end, options or {}))

    async def read_id(
        self,
        series_id: str,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return await self._dispatch(endpoints.read_id(series_id, start, end, options or {}))

    async def read_key(
        self,
        series_key: str,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return await self._dispatch(endpoints.read_key(series_key, start, end, options or {}))

    async def single_value_by_id(
        self,
        series_id: str,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return await self._dispatch(endpoints.single_value_by_id(series_id, ts, options or {}))

    async def single_value_by_key(
        self,
        series_key: str,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return await self._dispatch(endpoints.single_value_by_key(series_key, ts, options or {}))

    async def single_value(
        self,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult | SplitAggregate:
        return await self._dispatch(endpoints.single_value(ts, options or {}))

    async def write_id(self, series_id: str, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.write_id(series_id, data))

    async def write_key(self, series_key: str, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.write_key(series_key, data))

    async def write_bulk(self, ts: Timestamp, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.write_bulk(ts, data))

    async def write_multi(self, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.write_multi(data))

    async def increment_multi(self, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.increment_multi(data))

    async def increment_id(self, series_id: str, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.increment_id(series_id, data))

    async def increment_key(self, series_key: str, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.increment_key(series_key, data))

    async def increment_bulk(self, ts: Timestamp, data: Any) -> QueryResult:
        return await self._dispatch(endpoints.increment_bulk(ts, data))

    async def delete_id(self, series_id: str, start: Timestamp, end: Timestamp) -> QueryResult:
        return await self._dispatch(endpoints.delete_id(series_id, start, end))

    async def delete_key(self, series_key: str, start: Timestamp, end: Timestamp) -> QueryResult:
        return await self._dispatch(endpoints.delete_key(series_key, start, end))


__all__ = [
    "AsyncTempoDBClient",
]
