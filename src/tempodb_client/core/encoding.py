"""URL path and query string encoding."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from urllib.parse import quote

from .errors import TempoDBValidationError

# Characters left untouched when encoding a full path (everything except the
# unreserved set is otherwise escaped).
_PATH_SAFE = "/;,?:@&=+$#!~*'()"
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: object) -> str:
    return quote(_to_text(value), safe=_COMPONENT_SAFE)


def encode_path(path: str) -> str:
    return quote(path, safe=_PATH_SAFE)


def encode_query_params(params: Mapping[str, object] | None) -> str:
    """Encode ``params`` into a query string without the leading ``?``.

    Sequences expand into repeated ``name=value`` pairs and mappings into
    ``name[sub]=value`` pairs. ``None`` values are skipped. Lists nested below
    the top level render comma-joined; mappings may not nest.
    """

    if not params:
        return ""
    pairs: list[str] = []
    for name, value in params.items():
        encoded_name = encode_component(name)
        if value is None:
            continue
        if isinstance(value, Mapping):
            for sub_name, sub_value in value.items():
                pairs.append(
                    f"{encoded_name}[{encode_component(sub_name)}]={encode_component(sub_value)}"
                )
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            for item in value:
                pairs.append(f"{encoded_name}={encode_component(item)}")
        else:
            pairs.append(f"{encoded_name}={encode_component(value)}")
    return "&".join(pairs)


def _to_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, Mapping):
        raise TempoDBValidationError("query parameter values cannot nest mappings")
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ",".join(_to_text(item) for item in value)
    return str(value)


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


__all__ = [
    "encode_component",
    "encode_path",
    "encode_query_params",
]
