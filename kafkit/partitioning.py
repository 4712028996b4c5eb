"""Records to produce and the strategies that assign them to partitions."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from .xxhash import XxHash32

__all__ = [
    "Record",
    "ProduceMessage",
    "Partitions",
    "Topics",
    "Partitioner",
    "DefaultPartitioner",
    "as_bytes",
]

_U32_MASK = 0xFFFFFFFF


def as_bytes(data: Any) -> bytes:
    """Return the bytes a record key or value stands for.

    ``None`` stands for no data, strings are encoded as UTF-8 and
    bytes-like objects are taken as they are.
    """
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"cannot use {type(data).__name__} as message data")


@dataclass(frozen=True)
class Record:
    """A message to be sent to a topic.

    A negative ``partition`` means the partition is unspecified and is left
    to the partitioner to choose.
    """

    topic: str
    key: Any = None
    value: Any = None
    partition: int = -1

    @classmethod
    def from_value(cls, topic: str, value: Any) -> Record:
        """Create a key-less record with an unspecified partition."""
        return cls(topic=topic, key=None, value=value)

    @classmethod
    def from_key_value(cls, topic: str, key: Any, value: Any) -> Record:
        """Create a key/value record with an unspecified partition."""
        return cls(topic=topic, key=key, value=value)

    def with_partition(self, partition: int) -> Record:
        """Return a copy of this record targeting ``partition``."""
        return dataclasses.replace(self, partition=partition)


def _to_option(data: bytes) -> bytes | None:
    return data if data else None


@dataclass
class ProduceMessage:
    """A message on its way to a broker; empty key or value become ``None``."""

    topic: str
    key: bytes | None = None
    value: bytes | None = None
    partition: int = -1

    @classmethod
    def from_record(cls, record: Record) -> ProduceMessage:
        """Build a message from a record's topic, partition, key and value."""
        return cls(
            topic=record.topic,
            key=_to_option(as_bytes(record.key)),
            value=_to_option(as_bytes(record.value)),
            partition=record.partition,
        )


@dataclass(frozen=True)
class Partitions:
    """Partition information of one topic as seen by a partitioner.

    ``available_ids`` lists the partitions with a known leader;
    ``num_all_partitions`` counts every partition of the topic.
    """

    available_ids: tuple[int, ...] = field(default_factory=tuple)
    num_all_partitions: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "available_ids", tuple(self.available_ids))

    def num_available(self) -> int:
        """Return the number of available partitions."""
        return len(self.available_ids)

    def num_all(self) -> int:
        """Return the total number of partitions, available or not."""
        return self.num_all_partitions


class Topics:
    """The known topics and their partitions."""

    def __init__(self, partitions: Mapping[str, Partitions]) -> None:
        self._partitions = partitions

    def partitions(self, topic: str) -> Partitions | None:
        """Return the partitions of ``topic``, or None if it is unknown."""
        return self._partitions.get(topic)


class Hasher(Protocol):
    def write(self, data: bytes) -> None: ...

    def finish(self) -> int: ...


class Partitioner(ABC):
    """Chooses or changes the target partition of outgoing messages."""

    @abstractmethod
    def partition(self, topics: Topics, message: ProduceMessage) -> None:
        """Inspect ``message`` and set its ``partition`` if desired."""


class DefaultPartitioner(Partitioner):
    """The partitioner used unless another is given.

    A message with a non-negative partition is left alone. A keyed message
    goes to ``hash(key) % number of all partitions``, so equal keys always
    land on the same partition. A key-less message is sent round robin to
    the available partitions. Messages for unknown topics are left alone.
    """

    def __init__(self, hasher_factory: Callable[[], Hasher] = XxHash32) -> None:
        self._hasher_factory = hasher_factory
        self._counter = 0

    def partition(self, topics: Topics, message: ProduceMessage) -> None:
        if message.partition >= 0:
            return
        partitions = topics.partitions(message.topic)
        if partitions is None:
            return
        if message.key is not None:
            num_partitions = partitions.num_all()
            if num_partitions == 0:
                return
            hasher = self._hasher_factory()
            hasher.write(message.key)
            digest = hasher.finish() & _U32_MASK
            message.partition = digest % num_partitions
            return
        available = partitions.available_ids
        if available:
            message.partition = available[self._counter % len(available)]
            self._counter = (self._counter + 1) & _U32_MASK