"""Topic partition assignments of a consumer; fixed once constructed."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

__all__ = ["Assignment", "Assignments", "from_map"]


@dataclass(frozen=True)
class Assignment:
    """A topic to consume and the partitions requested of it.

    An empty ``partitions`` means all available partitions. The partitions
    are kept in ascending order without duplicates.
    """

    topic: str
    partitions: tuple[int, ...] = ()


class Assignments:
    """A set of assignments ordered by topic.

    A topic is referred to by an integer reference obtained from ``topic_ref``.
    """

    def __init__(self, assignments: Iterable[Assignment]) -> None:
        self._items = sorted(assignments, key=lambda a: a.topic)
        self._topics = [a.topic for a in self._items]

    def topic_ref(self, topic: str) -> int | None:
        """Return the reference of ``topic``, or None if it is not assigned."""
        index = bisect_left(self._topics, topic)
        if index < len(self._topics) and self._topics[index] == topic:
            return index
        return None

    def __getitem__(self, ref: int) -> Assignment:
        if not 0 <= ref < len(self._items):
            raise IndexError(f"invalid assignment reference: {ref}")
        return self._items[ref]

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Assignments({self._items!r})"


def from_map(mapping: Mapping[str, Iterable[int]]) -> Assignments:
    """Build assignments from a topic to partitions mapping."""
    return Assignments(
        Assignment(topic, tuple(sorted(set(partitions))))
        for topic, partitions in mapping.items()
    )