import io

import pytest

from safeheaders.wav import WavError, load_stream_concurrent, load_wav

BASE = (
    b"RIFF"
    + b"\x00\x00\x00\x00WAVEfmt "
    + b"\x10\x00\x00\x00"
    + b"\x01\x00\x01\x00\x44\xac\x00\x00\x88\x58\x01\x00\x02\x00\x10\x00data"
    + b"\x04\x00\x00\x00"
    + b"\x01\x02\x03\x04"
)


def test_load_wav():
    assert load_wav(BASE) == b"\x01\x02\x03\x04"


def test_load_wav_invalid_header():
    with pytest.raises(WavError, match="invalid WAV header"):
        load_wav(b"RIFX" + BASE[4:])


def test_load_wav_too_short_for_magic():
    with pytest.raises(WavError):
        load_wav(b"RI")


def test_load_wav_too_short_for_header():
    with pytest.raises(WavError):
        load_wav(BASE[:40])


def test_load_wav_header_only_gives_no_samples():
    assert load_wav(BASE[:44]) == b""


def test_load_stream_concurrent():
    data = BASE * 2000
    samples = load_stream_concurrent(io.BytesIO(data))
    assert len(samples) == len(data) - 44
    assert samples == data[44:]


def test_load_stream_concurrent_invalid():
    with pytest.raises(WavError):
        load_stream_concurrent(io.BytesIO(bytes(1 << 10)))