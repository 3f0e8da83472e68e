"""Async key-set splitter with concurrent fan-out."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
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


class AsyncCaller(Protocol):
    async def call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        max_retries: int | None = None,
    ) -> QueryResult: ...


class AsyncKeySetSplitter:
    """Issues one request per key batch concurrently and merges the results."""

    def __init__(
        self,
        transport: AsyncCaller,
        *,
        max_batch_length: int = MAX_BATCH_KEY_LENGTH,
    ) -> None:
        self._transport = transport
        self._max_batch_length = max_batch_length

    async def split(
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

        tasks = [
            asyncio.ensure_future(
                self._transport.call(
                    method,
                    path,
                    batch_query_params(query_params, batch),
                    body,
                    max_retries=max_retries,
                )
            )
            for batch in batches
        ]
        merger = SplitMerger()
        first_error: TempoDBError | None = None
        try:
            for finished in asyncio.as_completed(tasks):
                try:
                    result = await finished
                except TempoDBError as exc:
                    if first_error is None:
                        first_error = exc
                    continue
                merger.add(result)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        if first_error is not None:
            raise first_error
        return merger.build()


__all__ = [
    "AsyncCaller",
    "AsyncKeySetSplitter",
]
