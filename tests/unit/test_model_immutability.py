from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from tempodb_client.core.models import KeyBatch, QueryResult, RequestDescriptor, SplitAggregate


def test_key_batch_keys_are_tuple():
    batch = KeyBatch(keys=["a", "b"], length=2)
    assert batch.keys == ("a", "b")
    with pytest.raises(FrozenInstanceError):
        batch.keys = ()  # type: ignore[misc]


def test_split_aggregate_failures_are_tuple_and_immutable():
    failure = QueryResult(response=500, body={"error": "x"})
    aggregate = SplitAggregate(response=500, body=failure.body, failures=[failure])
    assert aggregate.failures == (failure,)
    assert aggregate.ok is False
    with pytest.raises(FrozenInstanceError):
        aggregate.body = []  # type: ignore[misc]


def test_request_descriptor_is_immutable():
    descriptor = RequestDescriptor("GET", "/data/", {"key": ["a"]})
    assert descriptor.body is None
    assert descriptor.max_retries is None
    with pytest.raises(FrozenInstanceError):
        descriptor.method = "POST"  # type: ignore[misc]
