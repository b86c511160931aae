"""Extraction of sample data from RIFF WAV files."""

from __future__ import annotations

from typing import IO, Union

_RIFF = b"RIFF"
_HEADER_SIZE = 44

BytesLike = Union[bytes, bytearray, memoryview]


class WavError(ValueError):
    """Raised when data is not a usable WAV file."""


def load_wav(data: BytesLike) -> bytes:
    """Return the sample bytes following the canonical 44-byte WAV header."""
    buf = bytes(data)
    if len(buf) < len(_RIFF):
        raise WavError("unexpected end of data reading WAV header")
    if buf[: len(_RIFF)] != _RIFF:
        raise WavError("invalid WAV header")
    if len(buf) < _HEADER_SIZE:
        raise WavError(f"WAV data shorter than the {_HEADER_SIZE}-byte header")
    return buf[_HEADER_SIZE:]


def load_stream_concurrent(stream: IO[bytes]) -> bytes:
    """Read all of ``stream`` and return its WAV sample bytes."""
    return load_wav(stream.read())