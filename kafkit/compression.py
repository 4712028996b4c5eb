"""Compression types understood by Kafka."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Compression"]


class Compression(IntEnum):
    """Compression codecs; the values are the codec bits of a message's attributes.

    ``NONE`` is the default.
    """

    NONE = 0
    GZIP = 1
    SNAPPY = 2