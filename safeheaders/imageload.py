"""Image decoding, one at a time or in concurrent batches."""

from __future__ import annotations

import io
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Iterable, Union

from PIL import Image

_WORKERS = 4

BytesLike = Union[bytes, bytearray, memoryview]


class ImageDecodeError(ValueError):
    """Raised when image data cannot be decoded."""


def load(data: BytesLike) -> Image.Image:
    """Decode an image from ``data`` and return it fully loaded."""
    try:
        image = Image.open(io.BytesIO(bytes(data)))
        image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"failed to decode image: {exc}") from exc
    return image


def load_batch_concurrent(datas: Iterable[BytesLike]) -> list[Image.Image]:
    """Decode several images in parallel, keeping their order.

    Raises :class:`ImageDecodeError` if any of them fails to decode.
    """
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        return list(pool.map(load, datas))


def load_stream(stream: IO[bytes]) -> Image.Image:
    """Read all of ``stream`` and decode it as an image."""
    return load(stream.read())