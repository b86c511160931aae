import io

import pytest

from safeheaders.jsondoc import (
    UnmarshalError,
    marshal,
    unmarshal,
    unmarshal_parallel,
    unmarshal_stream,
)


def test_unmarshal():
    assert unmarshal(b'{"key": "value"}') == {"key": "value"}


def test_unmarshal_parallel():
    data = b'{"key1": "value1", "key2": "value2", "key3": {"nested": "value"}}'
    assert unmarshal_parallel(data) == {
        "key1": "value1",
        "key2": "value2",
        "key3": {"nested": "value"},
    }


def test_unmarshal_stream():
    assert unmarshal_stream(io.BytesIO(b'{"key": "value"}')) == {"key": "value"}


def test_unmarshal_null_gives_none():
    assert unmarshal(b"null") is None


def test_unmarshal_invalid_json():
    with pytest.raises(UnmarshalError, match="^unmarshal error: "):
        unmarshal(b'{"key": ')


def test_unmarshal_rejects_array():
    with pytest.raises(UnmarshalError, match="unmarshal error"):
        unmarshal(b"[1, 2]")


def test_unmarshal_rejects_nan():
    with pytest.raises(UnmarshalError):
        unmarshal(b'{"x": NaN}')


def test_unmarshal_parallel_propagates_error():
    with pytest.raises(UnmarshalError):
        unmarshal_parallel(b"not json")


def test_marshal_sorted_compact():
    assert marshal({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'


def test_marshal_html_escapes():
    assert marshal("<a&b>") == b'"\\u003ca\\u0026b\\u003e"'


def test_marshal_keeps_unicode():
    assert marshal("é") == "\"é\"".encode("utf-8")


def test_marshal_rejects_nan():
    with pytest.raises(ValueError):
        marshal(float("nan"))


def test_round_trip():
    value = {"name": "x", "list": [1, 2.5, True, None], "nested": {"k": "v"}}
    assert unmarshal(marshal(value)) == value