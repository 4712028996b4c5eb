"""Gzip compression of message payloads."""

from __future__ import annotations

import gzip
import io
import zlib
from typing import BinaryIO, Union

__all__ = ["compress", "uncompress"]

Source = Union[bytes, bytearray, memoryview, BinaryIO]


def compress(data: bytes) -> bytes:
    """Compress ``data`` into a gzip stream at the best compression level."""
    return gzip.compress(bytes(data), compresslevel=9)


def uncompress(source: Source) -> bytes:
    """Decompress a gzip stream given as bytes or as a binary stream.

    Raises ``OSError`` if the input is not a valid gzip stream.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))
    try:
        with gzip.GzipFile(fileobj=source, mode="rb") as decoder:
            return decoder.read()
    except (EOFError, zlib.error) as exc:
        raise OSError(f"invalid gzip data: {exc}") from exc