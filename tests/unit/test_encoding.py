from __future__ import annotations

from urllib.parse import parse_qsl

import pytest

from tempodb_client.core.encoding import encode_component, encode_path, encode_query_params
from tempodb_client.core.errors import TempoDBValidationError


def test_encode_query_params_empty_input_yields_empty_string():
    assert encode_query_params(None) == ""
    assert encode_query_params({}) == ""


def test_encode_query_params_scalar_sequence_and_mapping():
    encoded = encode_query_params(
        {
            "key": ["k1", "k 2"],
            "attr": {"room": "a&b"},
            "start": "2024-01-01T00:00:00Z",
            "allow_truncation": True,
            "limit": 5,
        }
    )
    assert encoded == (
        "key=k1&key=k%202"
        "&attr[room]=a%26b"
        "&start=2024-01-01T00%3A00%3A00Z"
        "&allow_truncation=true"
        "&limit=5"
    )


def test_encode_query_params_preserves_insertion_order():
    encoded = encode_query_params({"z": 1, "a": 2, "m": 3})
    assert encoded == "z=1&a=2&m=3"


def test_encode_query_params_skips_none_values():
    assert encode_query_params({"a": None, "b": "x"}) == "b=x"


def test_encoded_query_decodes_back_to_original_values():
    params = {
        "id": ["01/ab", "ä+ö", "x=y"],
        "attr": {"sub key": "v&w", "ü": "1"},
        "function": "mean?",
    }
    decoded = parse_qsl(encode_query_params(params), keep_blank_values=True)

    ids = [value for name, value in decoded if name == "id"]
    attrs = {
        name[len("attr[") : -1]: value
        for name, value in decoded
        if name.startswith("attr[") and name.endswith("]")
    }
    functions = [value for name, value in decoded if name == "function"]

    assert ids == params["id"]
    assert attrs == params["attr"]
    assert functions == ["mean?"]


def test_encode_component_escapes_reserved_characters():
    assert encode_component("a/b?c") == "a%2Fb%3Fc"
    assert encode_component("it's (ok)!") == "it's%20(ok)!"


def test_encode_path_keeps_reserved_characters_and_escapes_spaces():
    assert encode_path("/series/key/my key/data/") == "/series/key/my%20key/data/"
    assert encode_path("/series/key/a:b@c/") == "/series/key/a:b@c/"
    assert encode_path("/series/key/100%/") == "/series/key/100%25/"


def test_nested_sequence_values_render_comma_joined():
    encoded = encode_query_params({"attr": {"rooms": ["a", "b"]}, "id": [["x", None, 2]]})
    assert encoded == "attr[rooms]=a%2Cb&id=x%2C%2C2"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.0, "1"),
        (-3.0, "-3"),
        (0.25, "0.25"),
        (float("nan"), "NaN"),
        (float("inf"), "Infinity"),
    ],
)
def test_float_values_render_without_trailing_zero(value, expected):
    assert encode_query_params({"v": value}) == f"v={expected}"


@pytest.mark.parametrize(
    "params",
    [
        {"attr": {"room": {"floor": 1}}},
        {"id": [{"a": 1}]},
    ],
    ids=["mapping-in-mapping", "mapping-in-sequence"],
)
def test_nested_mappings_are_rejected(params):
    with pytest.raises(TempoDBValidationError, match="cannot nest mappings"):
        encode_query_params(params)
