"""Validation of glTF binary model data."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import IO, Union

_MAGIC = b"glTF"
_WORKERS = 4

BytesLike = Union[bytes, bytearray, memoryview]


class GltfError(ValueError):
    """Raised when data is not a glTF binary asset."""


def load_gltf(data: BytesLike) -> bytes:
    """Check the glTF magic and return the asset bytes unchanged."""
    buf = bytes(data)
    if not buf.startswith(_MAGIC):
        raise GltfError("invalid glTF header")
    return buf


def _split(buf: bytes, parts: int) -> list[bytes]:
    size = len(buf) // parts
    bounds = [i * size for i in range(parts)] + [len(buf)]
    return [buf[lo:hi] for lo, hi in zip(bounds, bounds[1:])]


def load_asset_concurrent(data: BytesLike) -> bytes:
    """Load ``data`` as four equal chunks in parallel and join the results.

    Every chunk must itself begin with the glTF magic; the last chunk takes
    any remainder.
    """
    chunks = _split(bytes(data), _WORKERS)
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        loaded = list(pool.map(load_gltf, chunks))
    return b"".join(loaded)


def load_stream(stream: IO[bytes]) -> bytes:
    """Read all of ``stream`` and load it as a glTF asset."""
    return load_gltf(stream.read())