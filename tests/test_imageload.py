import io

import pytest
from PIL import Image

from safeheaders.imageload import ImageDecodeError, load, load_batch_concurrent, load_stream

PNG_SIGNATURE_ONLY = b"\x89PNG\r\n\x1a\n"


def _png(size, color):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def test_load_batch_concurrent_invalid_data():
    with pytest.raises(ImageDecodeError):
        load_batch_concurrent([PNG_SIGNATURE_ONLY, PNG_SIGNATURE_ONLY])


def test_load_decodes_png():
    image = load(_png((2, 3), (10, 20, 30)))
    assert image.size == (2, 3)
    assert image.getpixel((1, 2)) == (10, 20, 30)


def test_load_invalid_message():
    with pytest.raises(ImageDecodeError, match="^failed to decode image: "):
        load(b"not an image")


def test_load_batch_concurrent_keeps_order():
    sizes = [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1), (6, 1)]
    images = load_batch_concurrent([_png(size, (0, 0, 0)) for size in sizes])
    assert [image.size for image in images] == sizes


def test_load_batch_concurrent_one_bad_fails_all():
    with pytest.raises(ImageDecodeError):
        load_batch_concurrent([_png((1, 1), (1, 2, 3)), b"garbage"])


def test_load_batch_concurrent_empty():
    assert load_batch_concurrent([]) == []


def test_load_stream():
    image = load_stream(io.BytesIO(_png((4, 4), (255, 0, 0))))
    assert image.size == (4, 4)
    assert image.getpixel((0, 0)) == (255, 0, 0)