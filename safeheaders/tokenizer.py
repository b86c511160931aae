"""Flat JSON tokenizer with chunked and streaming modes.

Tokens record their kind, byte span, child count and parent index; the
tokenizer does not build values and accepts loosely formed input in
:meth:`Parser.parse`.
"""

from __future__ import annotations

import argparse
import itertools
import json
import os
import re
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import IO, Iterator, Union

_PARALLEL_THRESHOLD = 512
_MAX_WORKERS = 4
_SAMPLE_JSON = b'{"key": "value", "arr": [1, 2, 3]}'

_STRING_BODY = re.compile(rb'(?:[^"\\]|\\.)*"', re.DOTALL)
_PRIMITIVE_BODY = re.compile(rb"[^ \t\r\n,\]}]*")

_JSON_WHITESPACE = " \t\r\n"
_SCALAR_START = frozenset('"-0123456789tfn')

Scalar = Union[str, int, float, bool, None]


class TokenizerError(ValueError):
    """Raised when input cannot be tokenized."""


class TokenType(IntEnum):
    """Kind of a JSON token."""

    OBJECT = 0
    ARRAY = 1
    STRING = 2
    PRIMITIVE = 3


@dataclass
class Token:
    """A token: its kind, span in the input, child count and parent index."""

    type: TokenType
    start: int = 0
    end: int = 0
    size: int = 0
    parent: int = -1


def _as_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class Parser:
    """Tokenizer with room for a fixed number of tokens."""

    def __init__(self, num_tokens: int) -> None:
        if num_tokens < 0:
            raise ValueError("num_tokens must not be negative")
        self.capacity = num_tokens
        self._tokens: list[Token] = []
        self._toksuper = -1
        self._pos = 0

    def parse(self, data: Union[bytes, bytearray, memoryview, str]) -> int:
        """Tokenize ``data`` and return the number of tokens found."""
        buf = _as_bytes(data)
        self._tokens = []
        self._toksuper = -1
        self._pos = 0
        length = len(buf)

        while self._pos < length:
            c = buf[self._pos]
            if c in b"{[":
                kind = TokenType.OBJECT if c == ord("{") else TokenType.ARRAY
                self._alloc(Token(kind, start=self._pos, end=-1, parent=self._toksuper))
                self._toksuper = len(self._tokens) - 1
                self._pos += 1
            elif c in b"}]":
                self._close_container(self._pos + 1)
                self._pos += 1
            elif c == ord('"'):
                self._parse_string(buf)
            elif c in b" \t\r\n:,":
                self._pos += 1
            else:
                self._parse_primitive(buf)

        for token in self._tokens:
            if token.end == -1:
                token.end = length
        if self._toksuper != -1:
            raise TokenizerError("unclosed object or array")
        return len(self._tokens)

    def tokens(self) -> list[Token]:
        """Return the tokens of the last parse."""
        return list(self._tokens)

    def _alloc(self, token: Token) -> None:
        if len(self._tokens) >= self.capacity:
            raise TokenizerError("token overflow: too many tokens")
        self._tokens.append(token)
        if self._toksuper != -1:
            self._tokens[self._toksuper].size += 1

    def _close_container(self, end: int) -> None:
        if self._toksuper != -1:
            container = self._tokens[self._toksuper]
            container.end = end
            self._toksuper = container.parent

    def _parse_string(self, buf: bytes) -> None:
        start = self._pos + 1
        match = _STRING_BODY.match(buf, start)
        if match is None:
            raise TokenizerError("unclosed string")
        closing = match.end() - 1
        self._alloc(Token(TokenType.STRING, start=start, end=closing, parent=self._toksuper))
        self._pos = closing + 1

    def _parse_primitive(self, buf: bytes) -> None:
        start = self._pos
        end = _PRIMITIVE_BODY.match(buf, start).end()
        if end == start:
            raise TokenizerError("empty primitive")
        self._pos = end
        self._alloc(Token(TokenType.PRIMITIVE, start=start, end=end, parent=self._toksuper))


def _tokenize_chunk(chunk: bytes, num_tokens: int) -> list[Token]:
    parser = Parser(num_tokens)
    parser.parse(chunk)
    return parser.tokens()


def parse_parallel(data: Union[bytes, bytearray, memoryview, str], num_tokens: int) -> list[Token]:
    """Tokenize ``data`` split into chunks handled concurrently.

    Inputs shorter than 512 bytes are tokenized in one piece. Longer inputs
    are cut into up to four equal chunks; each chunk is tokenized on its own,
    with room for ``num_tokens`` tokens, and positions relative to the chunk.
    The token lists are concatenated in chunk order.
    """
    buf = _as_bytes(data)
    if len(buf) < _PARALLEL_THRESHOLD:
        return _tokenize_chunk(buf, num_tokens)

    workers = min(os.cpu_count() or 1, _MAX_WORKERS)
    chunk_size = len(buf) // workers
    bounds = [i * chunk_size for i in range(workers)] + [len(buf)]
    chunks = [buf[lo:hi] for lo, hi in zip(bounds, bounds[1:])]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_tokenize_chunk, chunks, itertools.repeat(num_tokens)))
    return [token for chunk_tokens in results for token in chunk_tokens]


class _Delim(Enum):
    OPEN_OBJECT = "{"
    CLOSE_OBJECT = "}"
    OPEN_ARRAY = "["
    CLOSE_ARRAY = "]"

    @property
    def closes(self) -> bool:
        return self in (_Delim.CLOSE_OBJECT, _Delim.CLOSE_ARRAY)


class _Expect(Enum):
    TOP_VALUE = auto()
    ARRAY_START = auto()
    ARRAY_VALUE = auto()
    ARRAY_COMMA = auto()
    OBJECT_START = auto()
    OBJECT_KEY = auto()
    OBJECT_COLON = auto()
    OBJECT_VALUE = auto()
    OBJECT_COMMA = auto()


_VALUE_STATES = frozenset(
    {_Expect.TOP_VALUE, _Expect.ARRAY_START, _Expect.ARRAY_VALUE, _Expect.OBJECT_VALUE}
)


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid literal {name}")


def _state_after_value(stack: list[str]) -> _Expect:
    if not stack:
        return _Expect.TOP_VALUE
    return _Expect.ARRAY_COMMA if stack[-1] == "[" else _Expect.OBJECT_COMMA


def _json_tokens(text: str) -> Iterator[Union[_Delim, Scalar]]:
    """Yield delimiters and scalar values of a sequence of JSON documents.

    Input that ends between tokens ends the sequence quietly; malformed input
    raises :class:`TokenizerError`.
    """
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    stack: list[str] = []
    state = _Expect.TOP_VALUE
    pos = 0
    length = len(text)

    def invalid(char: str) -> TokenizerError:
        return TokenizerError(f"decoder error: invalid character {char!r} at offset {pos}")

    def decode_scalar() -> tuple[Scalar, int]:
        try:
            return decoder.raw_decode(text, pos)
        except ValueError as exc:
            raise TokenizerError(f"decoder error: {exc}") from exc

    while True:
        while pos < length and text[pos] in _JSON_WHITESPACE:
            pos += 1
        if pos >= length:
            return
        c = text[pos]

        if c in "{[":
            if state not in _VALUE_STATES:
                raise invalid(c)
            stack.append(c)
            state = _Expect.OBJECT_START if c == "{" else _Expect.ARRAY_START
            pos += 1
            yield _Delim(c)
        elif c == "]":
            if state not in (_Expect.ARRAY_START, _Expect.ARRAY_COMMA):
                raise invalid(c)
            stack.pop()
            state = _state_after_value(stack)
            pos += 1
            yield _Delim.CLOSE_ARRAY
        elif c == "}":
            if state not in (_Expect.OBJECT_START, _Expect.OBJECT_COMMA):
                raise invalid(c)
            stack.pop()
            state = _state_after_value(stack)
            pos += 1
            yield _Delim.CLOSE_OBJECT
        elif c == ",":
            if state is _Expect.ARRAY_COMMA:
                state = _Expect.ARRAY_VALUE
            elif state is _Expect.OBJECT_COMMA:
                state = _Expect.OBJECT_KEY
            else:
                raise invalid(c)
            pos += 1
        elif c == ":":
            if state is not _Expect.OBJECT_COLON:
                raise invalid(c)
            state = _Expect.OBJECT_VALUE
            pos += 1
        elif state in (_Expect.OBJECT_START, _Expect.OBJECT_KEY):
            if c != '"':
                raise invalid(c)
            key, pos = decode_scalar()
            state = _Expect.OBJECT_COLON
            yield key
        elif state in _VALUE_STATES and c in _SCALAR_START:
            value, pos = decode_scalar()
            state = _state_after_value(stack)
            yield value
        else:
            raise invalid(c)


def _read_text(stream: IO) -> str:
    data = stream.read()
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8", errors="replace")


def _utf8_length(text: str) -> int:
    return len(text.encode("utf-8", errors="surrogatepass"))


def parse_stream(stream: IO, num_tokens: int) -> list[Token]:
    """Tokenize JSON read from ``stream``.

    Positions count tokens rather than bytes: each token starts at its
    ordinal, a string ends at its ordinal plus its UTF-8 length, and a
    container ends at the ordinal of its closing delimiter.
    """
    parser = Parser(num_tokens)
    pos = 0
    for item in _json_tokens(_read_text(stream)):
        if isinstance(item, _Delim):
            if item.closes:
                parser._close_container(pos)
                pos += 1
                continue
            kind = TokenType.OBJECT if item is _Delim.OPEN_OBJECT else TokenType.ARRAY
            token = Token(kind, start=pos, end=pos + 1, parent=parser._toksuper)
        elif isinstance(item, str):
            token = Token(
                TokenType.STRING, start=pos, end=pos + _utf8_length(item), parent=parser._toksuper
            )
        else:
            token = Token(TokenType.PRIMITIVE, start=pos, end=pos + 1, parent=parser._toksuper)
        parser._alloc(token)
        if token.type in (TokenType.OBJECT, TokenType.ARRAY):
            parser._toksuper = len(parser._tokens) - 1
        pos += 1
    return parser.tokens()


def parse_stream_decoder(stream: IO, num_tokens: int) -> list[Token]:
    """Tokenize JSON read from ``stream`` with approximate positions.

    Every new token becomes the parent of the next one, and closing
    delimiters set the current parent's end to the running token count
    plus one.
    """
    parser = Parser(num_tokens)
    for item in _json_tokens(_read_text(stream)):
        if isinstance(item, _Delim):
            if item.closes:
                parser._close_container(parser._pos + 1)
                continue
            kind = TokenType.OBJECT if item is _Delim.OPEN_OBJECT else TokenType.ARRAY
        elif isinstance(item, str):
            kind = TokenType.STRING
        else:
            kind = TokenType.PRIMITIVE
        parser._alloc(Token(kind, parent=parser._toksuper))
        parser._toksuper = len(parser._tokens) - 1
        parser._pos += 1
    return parser.tokens()


def main(argv: list[str] | None = None) -> int:
    """Tokenize a JSON file (or a built-in sample) in every mode and report."""
    arg_parser = argparse.ArgumentParser(description="Tokenize JSON and print the tokens.")
    arg_parser.add_argument("path", nargs="?", help="JSON file to tokenize")
    args = arg_parser.parse_args(argv)

    if args.path is None:
        data = _SAMPLE_JSON
    else:
        with open(args.path, "rb") as handle:
            data = handle.read()

    parser = Parser(10)
    try:
        parser.parse(data)
    except TokenizerError as exc:
        print(f"Error parsing JSON: {exc}", file=sys.stderr)
        return 1
    for token in parser.tokens():
        print(
            f"Token: Type={int(token.type)}, Start={token.start}, "
            f"End={token.end}, Size={token.size}"
        )

    try:
        parallel_tokens = parse_parallel(data, 1000)
    except TokenizerError as exc:
        print(f"Error in parallel parsing: {exc}", file=sys.stderr)
        return 1
    print(f"Parallel tokens count: {len(parallel_tokens)}")

    try:
        with open(args.path, "rb") if args.path else _BytesSource(data) as stream:
            stream_tokens = parse_stream(stream, 1000)
    except TokenizerError as exc:
        print(f"Error in streaming parsing: {exc}", file=sys.stderr)
        return 1
    print(f"Stream tokens count: {len(stream_tokens)}")
    return 0


class _BytesSource:
    """In-memory binary source usable as a context manager."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self) -> bytes:
        return self._data

    def __enter__(self) -> "_BytesSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


if __name__ == "__main__":
    sys.exit(main())