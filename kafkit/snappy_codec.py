"""Snappy compression: raw blocks and the chunked framing of snappy-java streams."""

from __future__ import annotations

import io
import struct

from .errors import InvalidSnappyError, UnexpectedEOFError

__all__ = ["compress", "uncompress", "validate_stream", "SnappyReader", "MAGIC"]

MAGIC = b"\x82SNAPPY\x00"

_I32 = struct.Struct(">i")
_BLOCK_SIZE = 1 << 16
_INPUT_MARGIN = 15
_MAX_VARINT_BYTES = 5


# ---------------------------------------------------------------- raw format


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _decode_varint(data: bytes) -> tuple[int, int]:
    result = 0
    for index, byte in enumerate(data[:_MAX_VARINT_BYTES]):
        result |= (byte & 0x7F) << (7 * index)
        if byte < 0x80:
            if result > 0xFFFFFFFF:
                break
            return result, index + 1
    raise InvalidSnappyError("invalid snappy header")


def _literal(chunk: bytes) -> bytes:
    n = len(chunk) - 1
    if n < 60:
        return bytes([n << 2]) + chunk
    width = (n.bit_length() + 7) // 8
    return bytes([(59 + width) << 2]) + n.to_bytes(width, "little") + chunk


def _copy2(offset: int, length: int) -> bytes:
    return bytes([2 | ((length - 1) << 2)]) + offset.to_bytes(2, "little")


def _copy(offset: int, length: int) -> bytes:
    out = bytearray()
    while length >= 68:
        out += _copy2(offset, 64)
        length -= 64
    if length > 64:
        out += _copy2(offset, 60)
        length -= 60
    if length < 12 and offset < 2048:
        out += bytes([1 | ((length - 4) << 2) | ((offset >> 8) << 5), offset & 0xFF])
    else:
        out += _copy2(offset, length)
    return bytes(out)


def _compress_block(block: bytes) -> bytes:
    if len(block) < _INPUT_MARGIN:
        return _literal(block)
    out = bytearray()
    table: dict[bytes, int] = {}
    literal_start = 0
    pos = 0
    size = len(block)
    while pos <= size - 4:
        key = block[pos : pos + 4]
        candidate = table.get(key)
        table[key] = pos
        if candidate is None:
            pos += 1
            continue
        match_len = 4
        while pos + match_len < size and block[candidate + match_len] == block[pos + match_len]:
            match_len += 1
        if pos > literal_start:
            out += _literal(block[literal_start:pos])
        out += _copy(pos - candidate, match_len)
        pos += match_len
        literal_start = pos
    if literal_start < size:
        out += _literal(block[literal_start:])
    return bytes(out)


def compress(data: bytes) -> bytes:
    """Compress ``data`` into a raw snappy block."""
    data = bytes(data)
    out = bytearray(_encode_varint(len(data)))
    for start in range(0, len(data), _BLOCK_SIZE):
        out += _compress_block(data[start : start + _BLOCK_SIZE])
    return bytes(out)


def uncompress(data: bytes) -> bytes:
    """Decompress a raw snappy block.

    Raises ``InvalidSnappyError`` if the input is not valid snappy data.
    """
    data = bytes(data)
    if not data:
        raise InvalidSnappyError("empty snappy input")
    expected, pos = _decode_varint(data)
    if expected == 0:
        return b""
    out = bytearray()
    end = len(data)
    while pos < end:
        tag = data[pos]
        pos += 1
        kind = tag & 3
        if kind == 0:
            length = tag >> 2
            if length >= 60:
                width = length - 59
                if pos + width > end:
                    raise InvalidSnappyError("truncated literal length")
                length = int.from_bytes(data[pos : pos + width], "little")
                pos += width
            length += 1
            if pos + length > end or len(out) + length > expected:
                raise InvalidSnappyError("literal exceeds bounds")
            out += data[pos : pos + length]
            pos += length
            continue
        if kind == 1:
            if pos + 1 > end:
                raise InvalidSnappyError("truncated copy")
            length = 4 + ((tag >> 2) & 7)
            offset = ((tag >> 5) << 8) | data[pos]
            pos += 1
        else:
            width = 2 if kind == 2 else 4
            if pos + width > end:
                raise InvalidSnappyError("truncated copy")
            length = (tag >> 2) + 1
            offset = int.from_bytes(data[pos : pos + width], "little")
            pos += width
        if offset == 0 or offset > len(out):
            raise InvalidSnappyError(f"invalid copy offset {offset}")
        if len(out) + length > expected:
            raise InvalidSnappyError("copy exceeds output length")
        start = len(out) - offset
        pattern = bytes(out[start:])
        if offset >= length:
            out += pattern[:length]
        else:
            out += (pattern * (length // offset + 1))[:length]
    if len(out) != expected:
        raise InvalidSnappyError(
            f"header mismatch: expected {expected} bytes, got {len(out)}"
        )
    return bytes(out)


# ---------------------------------------------------------- chunked stream


def _next_i32(data: memoryview) -> tuple[int, memoryview]:
    if len(data) < 4:
        raise UnexpectedEOFError()
    return _I32.unpack(data[:4])[0], data[4:]


def validate_stream(stream: bytes) -> bytes:
    """Check the snappy-java stream header and return the data following it.

    Only version 1 with compatibility 1 is accepted.
    """
    view = memoryview(bytes(stream))
    if len(view) < len(MAGIC):
        raise UnexpectedEOFError()
    if view[: len(MAGIC)] != MAGIC:
        raise InvalidSnappyError("invalid stream magic")
    view = view[len(MAGIC) :]
    version, view = _next_i32(view)
    if version != 1:
        raise InvalidSnappyError(f"unsupported stream version {version}")
    compat, view = _next_i32(view)
    if compat != 1:
        raise InvalidSnappyError(f"unsupported stream compatibility {compat}")
    return bytes(view)


class SnappyReader(io.RawIOBase):
    """Reads a stream of snappy compressed chunks as written by snappy-java.

    Each chunk is an int32 big-endian size followed by a raw snappy block.
    """

    def __init__(self, stream: bytes) -> None:
        super().__init__()
        self._compressed = memoryview(validate_stream(stream))
        self._chunk = b""
        self._pos = 0

    def readable(self) -> bool:
        return True

    def _take_chunk(self) -> bytes:
        size, rest = _next_i32(self._compressed)
        if size <= 0:
            raise InvalidSnappyError(f"unsupported chunk length {size}")
        if size > len(rest):
            raise UnexpectedEOFError()
        self._compressed = rest[size:]
        return uncompress(rest[:size])

    def _next_chunk(self) -> bool:
        if not len(self._compressed):
            return False
        self._pos = 0
        self._chunk = b""
        self._chunk = self._take_chunk()
        return True

    def read(self, size: int = -1) -> bytes:
        """Return up to ``size`` bytes from the current chunk; b'' at the end."""
        if size is None or size < 0:
            return self.readall()
        if size == 0:
            return b""
        while self._pos >= len(self._chunk):
            if not self._next_chunk():
                return b""
        data = self._chunk[self._pos : self._pos + size]
        self._pos += len(data)
        return data

    def readinto(self, buffer) -> int:
        data = self.read(len(buffer))
        buffer[: len(data)] = data
        return len(data)

    def readall(self) -> bytes:
        """Return all remaining uncompressed data."""
        parts = [self._chunk[self._pos :]]
        self._pos = len(self._chunk)
        while len(self._compressed):
            parts.append(self._take_chunk())
        return b"".join(parts)