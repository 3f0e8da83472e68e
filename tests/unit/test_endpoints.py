from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tempodb_client.client_shared import needs_split
from tempodb_client.core.errors import TempoDBValidationError
from tempodb_client.series import endpoints


def test_format_timestamp_passes_strings_through():
    assert endpoints.format_timestamp("2024-01-01") == "2024-01-01"


def test_format_timestamp_renders_utc_with_milliseconds():
    value = datetime(2024, 1, 1, 9, 30, 15, 123456, tzinfo=timezone(timedelta(hours=9)))
    assert endpoints.format_timestamp(value) == "2024-01-01T00:30:15.123Z"


def test_format_timestamp_treats_naive_datetime_as_utc():
    assert endpoints.format_timestamp(datetime(2024, 1, 2)) == "2024-01-02T00:00:00.000Z"


def test_format_timestamp_rejects_other_types():
    with pytest.raises(TempoDBValidationError):
        endpoints.format_timestamp(1704067200)  # type: ignore[arg-type]


def test_read_builds_range_params():
    descriptor = endpoints.read(datetime(2024, 1, 1), "2024-01-02T00:00:00Z", {"key": ["k1"]})
    assert descriptor.method == "GET"
    assert descriptor.path == "/data/"
    assert descriptor.query_params == {
        "key": ["k1"],
        "start": "2024-01-01T00:00:00.000Z",
        "end": "2024-01-02T00:00:00Z",
    }


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"series_id": ""}, "series_id must be a non-empty string"),
        ({"series_id": "id1", "attributes": ["a"]}, "attributes must be a mapping"),
        ({"series_id": "id1", "tags": "tag"}, "tags must be a list"),
    ],
)
def test_update_series_validates_arguments(kwargs, message):
    with pytest.raises(TempoDBValidationError, match=message):
        endpoints.update_series(**kwargs)


def test_create_series_ignores_empty_key():
    assert endpoints.create_series("").body == {}


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        ({}, False),
        ({"key": "single"}, False),
        ({"key": ["one"]}, False),
        ({"key": ["one", "two"]}, True),
        ({"id": ["one", "two"]}, False),
    ],
)
def test_needs_split_for_read_and_single_value(options, expected):
    assert needs_split(endpoints.read("s", "e", options)) is expected
    assert needs_split(endpoints.single_value("t", options)) is expected


@pytest.mark.parametrize(
    "descriptor",
    [
        endpoints.get_series({"key": ["one", "two"]}),
        endpoints.delete_series({"key": ["one", "two"]}),
        endpoints.read_id("id1", "s", "e", {"key": ["one", "two"]}),
        endpoints.single_value_by_key("k1", "t", {"key": ["one", "two"]}),
    ],
    ids=["get_series", "delete_series", "read_id", "single_value_by_key"],
)
def test_needs_split_ignores_key_lists_on_other_endpoints(descriptor):
    assert descriptor.splittable is False
    assert needs_split(descriptor) is False
