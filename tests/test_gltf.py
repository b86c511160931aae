import io

import pytest

from safeheaders.gltf import GltfError, load_asset_concurrent, load_gltf, load_stream

BASE = b"glTF" + b"\x02\x00\x00\x00" + b"\x0c\x00\x00\x00JSON" + b'{"asset":{"version":"2.0"}}'


def test_load_gltf_returns_data():
    assert load_gltf(BASE) == BASE


def test_load_gltf_accepts_bytearray():
    assert load_gltf(bytearray(BASE)) == BASE


def test_load_gltf_rejects_bad_header():
    with pytest.raises(GltfError, match="invalid glTF header"):
        load_gltf(b"GLTF" + BASE[4:])


def test_load_gltf_rejects_empty():
    with pytest.raises(GltfError):
        load_gltf(b"")


def test_load_asset_concurrent():
    data = BASE * 1000
    assert load_asset_concurrent(data) == data


def test_load_asset_concurrent_misaligned_chunk_fails():
    with pytest.raises(GltfError):
        load_asset_concurrent(BASE * 3)


def test_load_asset_concurrent_short_data_fails():
    with pytest.raises(GltfError):
        load_asset_concurrent(b"glTF")


def test_load_stream():
    assert load_stream(io.BytesIO(BASE)) == BASE


def test_load_stream_invalid():
    with pytest.raises(GltfError):
        load_stream(io.BytesIO(b"not a model"))