# safeheaders

Small loaders for a handful of data formats: a flat JSON tokenizer, JSON
object decoding and encoding, glTF header checks, WAV sample extraction,
raw DEFLATE compression and image decoding. Several modules also offer a
helper that splits the work into chunks handled by a thread pool.

## Installation

```
pip install safeheaders
```

To run the tests:

```
pip install "safeheaders[test]"
pytest
```

## Modules

### `safeheaders.tokenizer`: JSON tokenizer

Records where each object, array, string and primitive begins and ends in
the input, how many children a container has and which token is its
parent. It does not build values.

```python
from safeheaders.tokenizer import Parser, parse_parallel

parser = Parser(10)
count = parser.parse(b'{"key": "value", "arr": [1, 2, 3]}')
print(count)  # 8
for token in parser.tokens():
    print(token.type, token.start, token.end, token.size, token.parent)
```

- `Token` is a dataclass with `type` (a `TokenType`: `OBJECT`, `ARRAY`,
  `STRING` or `PRIMITIVE`), `start`, `end`, `size` and `parent` (`-1` for
  a top-level token).
- `Parser(num_tokens)` has room for at most `num_tokens` tokens.
  `Parser.parse(data)` accepts bytes or text, returns the token count and
  is lenient about separators. Running out of room, an unclosed string,
  an empty primitive or an unclosed object or array raises
  `TokenizerError` (a `ValueError`). `Parser.tokens()` returns the tokens
  of the last parse. String tokens span the text between the quotes.
- `parse_parallel(data, num_tokens)` tokenizes inputs shorter than 512
  bytes in one pass. Longer inputs are cut into up to four equal chunks
  (bounded by the CPU count), each tokenized on its own with room for
  `num_tokens` tokens; the lists are concatenated in order and positions
  are relative to each chunk.
- `parse_stream(stream, num_tokens)` reads all of a text or binary stream
  and validates it as strict JSON. Positions count tokens, not bytes: a
  token starts at its ordinal, a string ends at its ordinal plus its UTF-8
  length, and a container ends at the ordinal of its closing delimiter.
- `parse_stream_decoder(stream, num_tokens)` reads the same way but leaves
  positions at zero, except that a closing delimiter sets the current
  parent's end to the running token count plus one; every new token
  becomes the parent of the next.

Malformed input to the stream functions raises `TokenizerError` with a
message starting `decoder error:`.

#### Command

```
safeheaders-tokenize [path]
```

Tokenizes the JSON file at `path` (or a built-in sample) with `Parser`,
prints each token's type, start, end and size, then prints the token
counts from `parse_parallel` and `parse_stream`. Errors go to standard
error and the exit status is 1.

### `safeheaders.jsondoc`: JSON documents

- `unmarshal(data)` decodes text or bytes holding a JSON object into a
  `dict`; a bare `null` gives `None`. Invalid JSON, `NaN`/`Infinity`, or
  any other top-level value raises `UnmarshalError` (a `ValueError`).
- `unmarshal_parallel(data)` decodes the same way.
- `marshal(value)` encodes to compact UTF-8 JSON bytes with sorted keys,
  escaping `<`, `>`, `&`, U+2028 and U+2029; non-finite floats raise
  `ValueError`.
- `unmarshal_stream(stream)` reads a stream fully and decodes it.

### `safeheaders.gltf`: glTF binary assets

- `load_gltf(data)` checks for the `glTF` magic and returns the bytes
  unchanged; anything else raises `GltfError` (a `ValueError`).
- `load_asset_concurrent(data)` splits the data into four equal chunks
  (the last takes the remainder), checks each in a thread pool and joins
  them. Every chunk must itself begin with the magic.
- `load_stream(stream)` reads a stream fully and loads it.

### `safeheaders.wav`: WAV audio

- `load_wav(data)` checks for the `RIFF` header and returns the bytes after
  the canonical 44-byte header. Data that does not start with `RIFF` or is
  shorter than 44 bytes raises `WavError` (a `ValueError`).
- `load_stream_concurrent(stream)` reads a stream fully and returns its
  sample bytes.

### `safeheaders.deflate`: raw DEFLATE

```python
import io
from safeheaders.deflate import compress, decompress_stream

packed = compress(b"repeat data repeat data")
assert decompress_stream(io.BytesIO(packed)) == b"repeat data repeat data"
```

- `compress(data)` produces a raw DEFLATE stream (no zlib or gzip wrapper)
  at the best compression level.
- `compress_chunks_concurrent(data)` compresses four equal chunks in a
  thread pool and concatenates the four complete raw streams in order.
- `decompress_stream(stream)` inflates one raw DEFLATE stream, stopping at
  its end; corrupt or truncated input raises `zlib.error`.

### `safeheaders.imageload`: images

Built on Pillow.

- `load(data)` decodes an image and returns a fully loaded
  `PIL.Image.Image`; undecodable data raises `ImageDecodeError`
  (a `ValueError`).
- `load_batch_concurrent(datas)` decodes several images in a thread pool
  and returns them in input order; any failure raises `ImageDecodeError`.
- `load_stream(stream)` reads a stream fully and decodes it.

## What it does not do

- The tokenizer does not build Python values; use `safeheaders.jsondoc`
  for that.
- `safeheaders.gltf` only checks the magic: it does not read the version,
  the JSON chunk, meshes, buffers or textures.
- `safeheaders.wav` does not read channels, sample rate or bit depth, and
  assumes the samples start at byte 44.
- The output of `compress_chunks_concurrent` is four streams back to back;
  `decompress_stream` reads only the first of them.
- Nothing here writes glTF, WAV or image files.