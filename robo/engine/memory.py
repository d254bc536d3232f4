"""Bounded associative memory and the 64 KiB footprint model.

Footprint is measured against a packed layout of each record rather than
CPython object sizes, so the ceiling check is deterministic across
interpreters:

    single   <QII    planet id, day count, night count
    pair     <QQ?    previous, next, outcome
    triple   <QQQ?   second-to-last, last, next, outcome
    header   <QQ??I  window ids, window presence flags, day counter
"""

from __future__ import annotations

import struct
from collections import OrderedDict
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from robo.core.logging import get_logger

log = get_logger(__name__)

MEMORY_CEILING_BYTES = 65_536

SINGLE_ENTRY_BYTES = struct.calcsize("<QII")
PAIR_ENTRY_BYTES = struct.calcsize("<QQ?")
TRIPLE_ENTRY_BYTES = struct.calcsize("<QQQ?")
STATE_HEADER_BYTES = struct.calcsize("<QQ??I")

K = TypeVar("K")
V = TypeVar("V")


class MemoryCeilingError(Exception):
    """Raised when a predictor layout would exceed the memory ceiling."""


@dataclass(frozen=True)
class MemoryFootprint:
    """Packed-size view of one predictor state."""

    static_bytes: int
    used_bytes: int
    ceiling_bytes: int = MEMORY_CEILING_BYTES

    @property
    def headroom_bytes(self) -> int:
        return self.ceiling_bytes - max(self.static_bytes, self.used_bytes)

    @property
    def within_ceiling(self) -> bool:
        return self.static_bytes <= self.ceiling_bytes


def check_ceiling(static_bytes: int, ceiling_bytes: int = MEMORY_CEILING_BYTES) -> None:
    """Fail hard if a declared layout does not fit the ceiling.

    Raises:
        MemoryCeilingError: If ``static_bytes`` exceeds ``ceiling_bytes``.
    """
    if static_bytes > ceiling_bytes:
        msg = (
            f"Predictor memory layout needs {static_bytes} bytes, "
            f"exceeding the {ceiling_bytes}-byte ceiling. "
            "Reduce the declared memory capacities."
        )
        raise MemoryCeilingError(msg)


class BoundedMemory(Generic[K, V]):
    """Insertion-ordered map with an optional entry limit.

    Recency is write recency: ``upsert`` and ``upsert_with`` move a key to
    the most-recent end, ``get`` never reorders. When a new key arrives at
    a full memory the least recently written entry is evicted.
    """

    def __init__(self, name: str, entry_bytes: int, capacity: int = 0) -> None:
        if capacity < 0:
            msg = f"capacity must be >= 0, got {capacity}"
            raise ValueError(msg)
        self._name = name
        self._entry_bytes = entry_bytes
        self._capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._evictions = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def bounded(self) -> bool:
        return self._capacity > 0

    @property
    def evictions(self) -> int:
        return self._evictions

    @property
    def declared_bytes(self) -> int:
        """Worst-case packed size; 0 for an unbounded memory."""
        return self._capacity * self._entry_bytes

    @property
    def used_bytes(self) -> int:
        return len(self._entries) * self._entry_bytes

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def upsert(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``; the newest value always wins."""
        if key in self._entries:
            self._entries[key] = value
            self._entries.move_to_end(key)
            return
        self._make_room()
        self._entries[key] = value

    def upsert_with(self, key: K, factory: Callable[[], V]) -> V:
        """Return the value for ``key``, creating it with ``factory`` if absent."""
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
            return value
        self._make_room()
        value = factory()
        self._entries[key] = value
        return value

    def _make_room(self) -> None:
        if self._capacity and len(self._entries) >= self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            log.debug(
                "memory_evict",
                memory=self._name,
                key=repr(evicted),
                evictions=self._evictions,
            )
