"""The 32-bit xxHash function, used to partition messages by key."""

from __future__ import annotations

__all__ = ["XxHash32", "xxh32"]

_MASK = 0xFFFFFFFF

_PRIME1 = 2654435761
_PRIME2 = 2246822519
_PRIME3 = 3266489917
_PRIME4 = 668265263
_PRIME5 = 374761393

_STRIPE = 16


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _PRIME2) & _MASK
    return (_rotl(acc, 13) * _PRIME1) & _MASK


def _lane(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 4], "little")


def xxh32(data: bytes, seed: int = 0) -> int:
    """Return the 32-bit xxHash of ``data`` under ``seed``."""
    data = bytes(data)
    seed &= _MASK
    length = len(data)
    pos = 0

    if length >= _STRIPE:
        v1 = (seed + _PRIME1 + _PRIME2) & _MASK
        v2 = (seed + _PRIME2) & _MASK
        v3 = seed
        v4 = (seed - _PRIME1) & _MASK
        limit = length - _STRIPE
        while pos <= limit:
            v1 = _round(v1, _lane(data, pos))
            v2 = _round(v2, _lane(data, pos + 4))
            v3 = _round(v3, _lane(data, pos + 8))
            v4 = _round(v4, _lane(data, pos + 12))
            pos += _STRIPE
        acc = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK
    else:
        acc = (seed + _PRIME5) & _MASK

    acc = (acc + length) & _MASK

    while pos + 4 <= length:
        acc = (acc + _lane(data, pos) * _PRIME3) & _MASK
        acc = (_rotl(acc, 17) * _PRIME4) & _MASK
        pos += 4

    for byte in data[pos:]:
        acc = (acc + byte * _PRIME5) & _MASK
        acc = (_rotl(acc, 11) * _PRIME1) & _MASK

    acc ^= acc >> 15
    acc = (acc * _PRIME2) & _MASK
    acc ^= acc >> 13
    acc = (acc * _PRIME3) & _MASK
    acc ^= acc >> 16
    return acc


class XxHash32:
    """An incremental xxHash32 hasher.

    Successive ``write`` calls hash as if their data had been concatenated.
    """

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & _MASK
        self._buffer = bytearray()

    def write(self, data: bytes) -> None:
        """Feed ``data`` into the hasher."""
        self._buffer += data

    def finish(self) -> int:
        """Return the hash of all data written so far."""
        return xxh32(bytes(self._buffer), self._seed)