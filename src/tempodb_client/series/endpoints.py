"""Request builders for TempoDB endpoints."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from ..core.errors import TempoDBValidationError
from ..core.models import RequestDescriptor

Timestamp = str | datetime


def format_timestamp(value: Timestamp) -> str:
    """Render ``value`` as ISO-8601 UTC with millisecond precision; strings pass through."""

    if isinstance(value, str):
        return value
    if not isinstance(value, datetime):
        raise TempoDBValidationError("timestamp must be str or datetime")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _with_range(options: Mapping[str, Any], start: Timestamp, end: Timestamp) -> dict[str, Any]:
    params = dict(options)
    params["start"] = format_timestamp(start)
    params["end"] = format_timestamp(end)
    return params


def _with_ts(options: Mapping[str, Any], ts: Timestamp) -> dict[str, Any]:
    params = dict(options)
    params["ts"] = format_timestamp(ts)
    return params


def _bulk_body(ts: Timestamp, data: Any) -> dict[str, Any]:
    return {"t": format_timestamp(ts), "data": data}


def create_series(key: str | None = None) -> RequestDescriptor:
    body: dict[str, Any] = {}
    if isinstance(key, str) and key:
        body["key"] = key
    return RequestDescriptor("POST", "/series/", None, body)


def get_series(filters: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("GET", "/series/", dict(filters))


def delete_series(filters: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("DELETE", "/series/", dict(filters))


def update_series(
    series_id: str,
    series_key: str | None = None,
    name: str | None = None,
    attributes: Mapping[str, Any] | None = None,
    tags: Sequence[str] | None = None,
) -> RequestDescriptor:
    if attributes and not isinstance(attributes, Mapping):
        raise TempoDBValidationError("attributes must be a mapping")
    if tags and (not isinstance(tags, Sequence) or isinstance(tags, str)):
        raise TempoDBValidationError("tags must be a list")
    if not isinstance(series_id, str) or not series_id:
        raise TempoDBValidationError("series_id must be a non-empty string")
    body = {
        "id": series_id,
        "key": series_key,
        "name": name,
        "attributes": dict(attributes) if attributes else attributes,
        "tags": list(tags) if tags else tags,
    }
    return RequestDescriptor("PUT", f"/series/id/{series_id}/", None, body)


def read(start: Timestamp, end: Timestamp, options: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("GET", "/data/", _with_range(options, start, end), splittable=True)


def read_id(
    series_id: str,
    start: Timestamp,
    end: Timestamp,
    options: Mapping[str, Any],
) -> RequestDescriptor:
    return RequestDescriptor("GET", f"/series/id/{series_id}/data/", _with_range(options, start, end))


def read_key(
    series_key: str,
    start: Timestamp,
    end: Timestamp,
    options: Mapping[str, Any],
) -> RequestDescriptor:
    return RequestDescriptor("GET", f"/series/key/{series_key}/data/", _with_range(options, start, end))


def single_value_by_id(series_id: str, ts: Timestamp, options: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("GET", f"/series/id/{series_id}/single/", _with_ts(options, ts))


def single_value_by_key(series_key: str, ts: Timestamp, options: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("GET", f"/series/key/{series_key}/single/", _with_ts(options, ts))


def single_value(ts: Timestamp, options: Mapping[str, Any]) -> RequestDescriptor:
    return RequestDescriptor("GET", "/single/", _with_ts(options, ts), splittable=True)


def write_id(series_id: str, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", f"/series/id/{series_id}/data/", None, data)


def write_key(series_key: str, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", f"/series/key/{series_key}/data/", None, data)


def write_bulk(ts: Timestamp, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", "/data/", None, _bulk_body(ts, data))


def write_multi(data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", "/multi/", None, data)


def increment_multi(data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", "/multi/increment/", None, data)


def increment_id(series_id: str, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", f"/series/id/{series_id}/increment/", None, data)


def increment_key(series_key: str, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", f"/series/key/{series_key}/increment/", None, data)


def increment_bulk(ts: Timestamp, data: Any) -> RequestDescriptor:
    return RequestDescriptor("POST", "/increment/", None, _bulk_body(ts, data))


def delete_id(series_id: str, start: Timestamp, end: Timestamp) -> RequestDescriptor:
    return RequestDescriptor("DELETE", f"/series/id/{series_id}/data/", _with_range({}, start, end))


def delete_key(series_key: str, start: Timestamp, end: Timestamp) -> RequestDescriptor:
    return RequestDescriptor("DELETE", f"/series/key/{series_key}/data/", _with_range({}, start, end))


__all__ = [
    "Timestamp",
    "format_timestamp",
    "create_series",
    "get_series",
    "delete_series",
    "update_series",
    "read",
    "read_id",
    "read_key",
    "single_value_by_id",
    "single_value_by_key",
    "single_value",
    "write_id",
    "write_key",
    "write_bulk",
    "write_multi",
    "increment_multi",
    "increment_id",
    "increment_key",
    "increment_bulk",
    "delete_id",
    "delete_key",
]
