from __future__ import annotations

import pytest

from tempodb_client.core.errors import TempoDBTransportError
from tempodb_client.core.models import QueryResult
from tempodb_client.series.async_splitter import AsyncKeySetSplitter
from tests.shared.client_fakes import AsyncScriptedCaller, ok_for_keys

KEY_A = "a" * 2000
KEY_B = "b" * 2000
KEY_C = "c" * 2000


def _single_item(keys: list[str]) -> QueryResult:
    return QueryResult(200, [keys[0][0]])


@pytest.mark.asyncio
async def test_async_split_merges_three_batches():
    caller = AsyncScriptedCaller(_single_item)
    splitter = AsyncKeySetSplitter(caller)

    aggregate = await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B, KEY_C]})

    assert aggregate.response == 200
    assert sorted(aggregate.body) == ["a", "b", "c"]
    assert len(caller.calls) == 3


@pytest.mark.asyncio
async def test_async_split_appends_in_completion_order():
    caller = AsyncScriptedCaller(_single_item, delays={KEY_A: 0.05, KEY_B: 0.0, KEY_C: 0.02})
    splitter = AsyncKeySetSplitter(caller)

    aggregate = await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B, KEY_C]})

    assert aggregate.body == ["b", "c", "a"]


@pytest.mark.asyncio
async def test_async_split_dispatches_batches_concurrently():
    caller = AsyncScriptedCaller(_single_item, delays={KEY_A: 0.05, KEY_B: 0.05})
    splitter = AsyncKeySetSplitter(caller)

    aggregate = await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B]})

    assert caller.max_in_flight == 2
    assert [call["query_params"]["key"] for call in caller.calls] == [[KEY_A], [KEY_B]]
    assert sorted(aggregate.body) == ["a", "b"]


@pytest.mark.asyncio
async def test_async_split_partial_failure_reports_failing_batch_only():
    def responder(keys: list[str]):
        if keys[0] == KEY_B:
            return QueryResult(500, {"error": "x"})
        return QueryResult(200, ["a"])

    splitter = AsyncKeySetSplitter(AsyncScriptedCaller(responder))

    aggregate = await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B]})

    assert aggregate.response == 500
    assert aggregate.body == {"error": "x"}
    assert len(aggregate.failures) == 1


@pytest.mark.asyncio
async def test_async_split_last_completed_failure_wins():
    def responder(keys: list[str]):
        if keys[0] == KEY_A:
            return QueryResult(500, {"error": "slow"})
        if keys[0] == KEY_B:
            return QueryResult(503, {"error": "fast"})
        return QueryResult(200, ["c"])

    caller = AsyncScriptedCaller(responder, delays={KEY_A: 0.05})
    splitter = AsyncKeySetSplitter(caller)

    aggregate = await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B, KEY_C]})

    assert aggregate.response == 500
    assert aggregate.body == {"error": "slow"}
    assert [failure.body for failure in aggregate.failures] == [{"error": "fast"}, {"error": "slow"}]


@pytest.mark.asyncio
async def test_async_split_transport_error_fails_whole_operation():
    def responder(keys: list[str]):
        if keys[0] == KEY_A:
            return TempoDBTransportError("unreachable", code="ConnectError")
        return ok_for_keys(keys)

    caller = AsyncScriptedCaller(responder, delays={KEY_B: 0.02})
    splitter = AsyncKeySetSplitter(caller)

    with pytest.raises(TempoDBTransportError, match="unreachable"):
        await splitter.split("GET", "/data/", {"key": [KEY_A, KEY_B]})
    assert len(caller.calls) == 2
