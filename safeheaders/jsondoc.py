"""Decoding JSON objects and encoding values as compact JSON."""

from __future__ import annotations

import json
from typing import IO, Any, Optional, Union

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_ESCAPE_TABLE = str.maketrans(_HTML_ESCAPES)

TextOrBytes = Union[str, bytes, bytearray, memoryview]


class UnmarshalError(ValueError):
    """Raised when input is not a JSON object."""


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid character {name[0]!r} looking for beginning of value")


def unmarshal(data: TextOrBytes) -> Optional[dict[str, Any]]:
    """Decode a JSON object into a dict.

    A bare ``null`` decodes to ``None``; any other non-object value is an
    error.
    """
    text = data if isinstance(data, str) else bytes(data).decode("utf-8", errors="replace")
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise UnmarshalError(f"unmarshal error: {exc}") from exc
    if value is not None and not isinstance(value, dict):
        raise UnmarshalError(
            f"unmarshal error: cannot unmarshal {type(value).__name__} into an object"
        )
    return value


def unmarshal_parallel(data: TextOrBytes) -> Optional[dict[str, Any]]:
    """Decode a JSON object; nested objects are returned as decoded."""
    return unmarshal(data)


def marshal(value: Any) -> bytes:
    """Encode ``value`` as compact JSON with sorted keys and HTML-safe escapes."""
    text = json.dumps(
        value,
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.translate(_ESCAPE_TABLE).encode("utf-8")


def unmarshal_stream(stream: IO) -> Optional[dict[str, Any]]:
    """Read all of ``stream`` and decode it as a JSON object."""
    return unmarshal(stream.read())