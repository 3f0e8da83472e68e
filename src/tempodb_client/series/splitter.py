"""Key-set splitter with thread-pool fan-out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Protocol

from ..core.errors import TempoDBError
from ..core.models import QueryResult, SplitAggregate
from ..core.transport_shared import validate_call
from .splitter_shared import (
    MAX_BATCH_KEY_LENGTH,
    SplitMerger,
    batch_query_params,
    extract_keys,
    partition_keys,
)

logger = logging.getLogger("tempodb_client")


class SyncCaller(Protocol):
    def call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> QueryResult: ...


class KeySetSplitter:
    """Issues one request per key batch from a worker pool and merges the results.

    ``max_workers`` bounds the number of batches in flight at once.
    """

    def __init__(
        self,
        transport: SyncCaller,
        *,
        max_workers: int = 16,
        max_batch_length: int = MAX_BATCH_KEY_LENGTH,
    ) -> None:
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self._transport = transport
        self._max_workers = max_workers
        self._max_batch_length = max_batch_length

    def split(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any],
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> SplitAggregate:
        validate_call(method, path)
        batches = partition_keys(extract_keys(query_params), max_length=self._max_batch_length)
        logger.info(
            "split start method=%s path=%s batches=%s",
            method,
            path,
            len(batches),
        )

        merger = SplitMerger()
        if not batches:
            return merger.build()

        first_error: TempoDBError | None = None
        with ThreadPoolExecutor(max_workers=min(len(batches), self._max_workers)) as pool:
            futures: list[Future[QueryResult]] = [
                pool.submit(
                    self._transport.call,
                    method,
                    path,
                    batch_query_params(query_params, batch),
                    body,
                    max_retries=max_retries,
                )
                for batch in batches
            ]
            for finished in as_completed(futures):
                try:
                    result = finished.result()
                except TempoDBError as exc:
                    if first_error is None:
                        first_error = exc
                    continue
                merger.add(result)

        if first_error is not None:
            raise first_error
        return merger.build()


__all__ = [
    "SyncCaller",
    "KeySetSplitter",
]
