"""Raw DEFLATE compression, chunked compression and stream decompression."""

from __future__ import annotations

import zlib
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Union

_WORKERS = 4
_READ_SIZE = 64 * 1024

BytesLike = Union[bytes, bytearray, memoryview]


def compress(data: BytesLike) -> bytes:
    """Compress ``data`` as a raw DEFLATE stream at the best compression level."""
    compressor = zlib.compressobj(zlib.Z_BEST_COMPRESSION, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(bytes(data)) + compressor.flush()


def _split(buf: bytes, parts: int) -> list[bytes]:
    size = len(buf) // parts
    bounds = [i * size for i in range(parts)] + [len(buf)]
    return [buf[lo:hi] for lo, hi in zip(bounds, bounds[1:])]


def compress_chunks_concurrent(data: BytesLike) -> bytes:
    """Compress four equal chunks of ``data`` in parallel and concatenate them.

    The result is a sequence of four complete raw DEFLATE streams, one per
    chunk, in order; the last chunk takes any remainder.
    """
    chunks = _split(bytes(data), _WORKERS)
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        return b"".join(pool.map(compress, chunks))


def decompress_stream(stream: IO[bytes]) -> bytes:
    """Decompress one raw DEFLATE stream read from ``stream``.

    Reading stops at the end of the first complete DEFLATE stream. Raises
    :class:`zlib.error` on corrupt or truncated input.
    """
    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    out = bytearray()
    for block in iter(lambda: stream.read(_READ_SIZE), b""):
        out += decompressor.decompress(block)
        if decompressor.eof:
            break
    if not decompressor.eof:
        raise zlib.error("unexpected EOF")
    out += decompressor.flush()
    return bytes(out)