"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

from .client_shared import needs_split, resolve_config
from .config import TempoDBClientConfig
from .core.errors import TempoDBClientClosedError
from .core.metrics import ProcessTimeMetrics, ProcessTimeSnapshot
from .core.models import QueryResult, RequestDescriptor, SplitAggregate
from .core.retry import RetryPolicy
from .core.transport import SyncTransport
from .series import endpoints
from .series.splitter import KeySetSplitter
from .series.endpoints import Timestamp


class TempoDBClient:
    """Public TempoDB API client."""

    def __init__(
        self,
        key: str | None = None,
        secret: str | None = None,
        *,
        config: TempoDBClientConfig | None = None,
        transport: SyncTransport | None = None,
        metrics: ProcessTimeMetrics | None = None,
        retry_policy: RetryPolicy | None = None,
        **options: Any,
    ) -> None:
        self._config = resolve_config(key=key, secret=secret, config=config, options=options)
        self._transport = transport or SyncTransport(
            self._config,
            metrics=metrics,
            retry_policy=retry_policy,
        )
        self._splitter = KeySetSplitter(self._transport, max_workers=self._config.max_sockets)
        self._closed = False

    @property
    def config(self) -> TempoDBClientConfig:
        return self._config

    @property
    def process_time(self) -> ProcessTimeSnapshot:
        return self._transport.metrics.snapshot()

    def _ensure_open(self) -> None:
        if self._closed:
            raise TempoDBClientClosedError("TempoDBClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "TempoDBClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False

    def call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> QueryResult:
        self._ensure_open()
        return self._transport.call(
            method,
            path,
            query_params,
            body,
            max_retries=max_retries,
        )

    def split(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any],
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> SplitAggregate:
        self._ensure_open()
        return self._splitter.split(
            method,
            path,
            query_params,
            body,
            max_retries=max_retries,
        )

    def _dispatch(self, descriptor: RequestDescriptor) -> QueryResult | SplitAggregate:
        if needs_split(descriptor):
            return self.split(
                descriptor.method,
                descriptor.path,
                descriptor.query_params or {},
                descriptor.body,
                max_retries=descriptor.max_retries,
            )
        return self.call(
            descriptor.method,
            descriptor.path,
            descriptor.query_params,
            descriptor.body,
            max_retries=descriptor.max_retries,
        )

    def create_series(self, key: str | None = None) -> QueryResult:
        return self._dispatch(endpoints.create_series(key))

    def get_series(self, options: Mapping[str, Any] | None = None) -> QueryResult:
        return self._dispatch(endpoints.get_series(options or {}))

    def delete_series(self, options: Mapping[str, Any] | None = None) -> QueryResult:
        return self._dispatch(endpoints.delete_series(options or {}))

    def update_series(
        self,
        series_id: str,
        series_key: str | None = None,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        tags: Sequence[str] | None = None,
    ) -> QueryResult:
        return self._dispatch(
            endpoints.update_series(series_id, series_key, name, attributes, tags)
        )

    def read(
        self,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult | SplitAggregate:
        return self._dispatch(endpoints.read(start, end, options or {}))

    def read_id(
        self,
        series_id: str,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return self._dispatch(endpoints.read_id(series_id, start, end, options or {}))

    def read_key(
        self,
        series_key: str,
        start: Timestamp,
        end: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return self._dispatch(endpoints.read_key(series_key, start, end, options or {}))

    def single_value_by_id(
        self,
        series_id: str,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return self._dispatch(endpoints.single_value_by_id(series_id, ts, options or {}))

    def single_value_by_key(
        self,
        series_key: str,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        return self._dispatch(endpoints.single_value_by_key(series_key, ts, options or {}))

    def single_value(
        self,
        ts: Timestamp,
        options: Mapping[str, Any] | None = None,
    ) -> QueryResult | SplitAggregate:
        return self._dispatch(endpoints.single_value(ts, options or {}))

    def write_id(self, series_id: str, data: Any) -> QueryResult:
        return self._dispatch(endpoints.write_id(series_id, data))

    def write_key(self, series_key: str, data: Any) -> QueryResult:
        return self._dispatch(endpoints.write_key(series_key, data))

    def write_bulk(self, ts: Timestamp, data: Any) -> QueryResult:
        return self._dispatch(endpoints.write_bulk(ts, data))

    def write_multi(self, data: Any) -> QueryResult:
        return self._dispatch(endpoints.write_multi(data))

    def increment_multi(self, data: Any) -> QueryResult:
        return self._dispatch(endpoints.increment_multi(data))

    def increment_id(self, series_id: str, data: Any) -> QueryResult:
        return self._dispatch(endpoints.increment_id(series_id, data))

    def increment_key(self, series_key: str, data: Any) -> QueryResult:
        return self._dispatch(endpoints.increment_key(series_key, data))

    def increment_bulk(self, ts: Timestamp, data: Any) -> QueryResult:
        return self._dispatch(endpoints.increment_bulk(ts, data))

    def delete_id(self, series_id: str, start: Timestamp, end: Timestamp) -> QueryResult:
        return self._dispatch(endpoints.delete_id(series_id, start, end))

    def delete_key(self, series_key: str, start: Timestamp, end: Timestamp) -> QueryResult:
        return self._dispatch(endpoints.delete_key(series_key, start, end))


__all__ = [
    "TempoDBClient",
]
