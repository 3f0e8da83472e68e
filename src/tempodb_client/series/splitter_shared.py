"""Key partitioning and batch merging shared by sync/async splitters."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..core.errors import TempoDBValidationError
from ..core.models import KeyBatch, QueryResult, SplitAggregate, is_key_list

logger = logging.getLogger("tempodb_client")

KEY_PARAM = "key"
# ~4096 characters of practical URL budget minus ~1000 for host, path and
# the remaining query parameters.
MAX_BATCH_KEY_LENGTH = 3000


def partition_keys(
    keys: Sequence[str],
    *,
    max_length: int = MAX_BATCH_KEY_LENGTH,
) -> tuple[KeyBatch, ...]:
    """Group ``keys`` into batches whose cumulative key length stays within ``max_length``.

    A key longer than ``max_length`` still gets a batch of its own.
    """

    if max_length <= 0:
        raise ValueError("max_length must be > 0")

    batches: list[KeyBatch] = []
    current: list[str] = []
    current_length = 0
    for key in keys:
        if current_length > 0 and current_length + len(key) > max_length:
            batches.append(KeyBatch(keys=current, length=current_length))
            current = []
            current_length = 0
        current.append(key)
        current_length += len(key)
    if current:
        batches.append(KeyBatch(keys=current, length=current_length))
    return tuple(batches)


def extract_keys(query_params: Mapping[str, Any] | None) -> list[str]:
    keys = (query_params or {}).get(KEY_PARAM)
    if not is_key_list(keys):
        raise TempoDBValidationError("split requires a 'key' parameter holding a list of keys")
    normalized: list[str] = []
    for key in keys:
        if not isinstance(key, str):
            raise TempoDBValidationError("key entries must be str")
        normalized.append(key)
    return normalized


def batch_query_params(query_params: Mapping[str, Any], batch: KeyBatch) -> dict[str, Any]:
    params = dict(query_params)
    params[KEY_PARAM] = list(batch.keys)
    return params


class SplitMerger:
    """Accumulates batch results in completion order.

    Successful bodies are concatenated. Any failing batch makes the aggregate a
    failure carrying the last failing batch's status and body.
    """

    def __init__(self) -> None:
        self._body: list[Any] = []
        self._failures: list[QueryResult] = []

    def add(self, result: QueryResult) -> None:
        if result.response == 200 and isinstance(result.body, list):
            self._body.extend(result.body)
            return
        logger.warning(
            "split batch failed status=%s body=%r",
            result.response,
            result.body,
        )
        self._failures.append(result)

    def build(self) -> SplitAggregate:
        if not self._failures:
            return SplitAggregate(response=200, body=list(self._body))
        last = self._failures[-1]
        return SplitAggregate(response=last.response, body=last.body, failures=self._failures)


__all__ = [
    "KEY_PARAM",
    "MAX_BATCH_KEY_LENGTH",
    "partition_keys",
    "extract_keys",
    "batch_query_params",
    "SplitMerger",
]
