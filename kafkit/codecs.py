"""Big-endian primitives of the Kafka wire protocol.

Integers are fixed-width big-endian values, strings carry an ``int16``
byte-length prefix, byte blobs and arrays an ``int32`` length prefix.
Encoders return ``bytes``; decoders read from a binary stream.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable, Iterable, TypeVar

from .errors import CodecError, StringDecodeError, UnexpectedEOFError

__all__ = [
    "encode_i8",
    "encode_i16",
    "encode_i32",
    "encode_i64",
    "encode_str",
    "encode_bytes",
    "encode_array",
    "encode_strings",
    "decode_i8",
    "decode_i16",
    "decode_i32",
    "decode_i64",
    "decode_str",
    "decode_bytes",
    "decode_array",
    "decode_strings",
]

T = TypeVar("T")

_I8 = struct.Struct(">b")
_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")

_I16_MAX = 2**15 - 1
_I32_MAX = 2**31 - 1


def _pack(fmt: struct.Struct, value: int) -> bytes:
    try:
        return fmt.pack(value)
    except struct.error as exc:
        raise CodecError(f"value out of range: {value!r}") from exc


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) < size:
        raise UnexpectedEOFError()
    return data


def _unpack(fmt: struct.Struct, stream: BinaryIO) -> int:
    return fmt.unpack(_read_exact(stream, fmt.size))[0]


def encode_i8(value: int) -> bytes:
    """Encode a signed 8-bit integer."""
    return _pack(_I8, value)


def encode_i16(value: int) -> bytes:
    """Encode a signed 16-bit big-endian integer."""
    return _pack(_I16, value)


def encode_i32(value: int) -> bytes:
    """Encode a signed 32-bit big-endian integer."""
    return _pack(_I32, value)


def encode_i64(value: int) -> bytes:
    """Encode a signed 64-bit big-endian integer."""
    return _pack(_I64, value)


def encode_str(value: str) -> bytes:
    """Encode a string as its UTF-8 bytes preceded by an int16 length."""
    raw = value.encode("utf-8")
    if len(raw) > _I16_MAX:
        raise CodecError(f"string too long: {len(raw)} bytes")
    return _I16.pack(len(raw)) + raw


def encode_bytes(value: bytes) -> bytes:
    """Encode a byte blob preceded by an int32 length."""
    raw = bytes(value)
    if len(raw) > _I32_MAX:
        raise CodecError(f"byte sequence too long: {len(raw)} bytes")
    return _I32.pack(len(raw)) + raw


def encode_array(items: Iterable[T], encode_item: Callable[[T], bytes]) -> bytes:
    """Encode an int32 element count followed by each encoded element."""
    elements = list(items)
    if len(elements) > _I32_MAX:
        raise CodecError(f"array too long: {len(elements)} elements")
    return _I32.pack(len(elements)) + b"".join(encode_item(x) for x in elements)


def encode_strings(items: Iterable[str]) -> bytes:
    """Encode a sequence of strings as a protocol array."""
    return encode_array(items, encode_str)


def decode_i8(stream: BinaryIO) -> int:
    """Read a signed 8-bit integer."""
    return _unpack(_I8, stream)


def decode_i16(stream: BinaryIO) -> int:
    """Read a signed 16-bit big-endian integer."""
    return _unpack(_I16, stream)


def decode_i32(stream: BinaryIO) -> int:
    """Read a signed 32-bit big-endian integer."""
    return _unpack(_I32, stream)


def decode_i64(stream: BinaryIO) -> int:
    """Read a signed 64-bit big-endian integer."""
    return _unpack(_I64, stream)


def decode_str(stream: BinaryIO) -> str:
    """Read an int16-length-prefixed UTF-8 string; a non-positive length yields ''."""
    length = decode_i16(stream)
    if length <= 0:
        return ""
    raw = _read_exact(stream, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StringDecodeError() from exc


def decode_bytes(stream: BinaryIO) -> bytes:
    """Read an int32-length-prefixed byte blob; a non-positive length yields b''."""
    length = decode_i32(stream)
    if length <= 0:
        return b""
    return _read_exact(stream, length)


def decode_array(stream: BinaryIO, decode_item: Callable[[BinaryIO], T]) -> list[T]:
    """Read an int32 element count and then that many elements."""
    length = decode_i32(stream)
    if length <= 0:
        return []
    return [decode_item(stream) for _ in range(length)]


def decode_strings(stream: BinaryIO) -> list[str]:
    """Read a protocol array of strings."""
    return decode_array(stream, decode_str)