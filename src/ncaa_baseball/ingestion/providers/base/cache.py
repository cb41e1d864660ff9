from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: float
    seq: int


@dataclass(frozen=True)
class CacheStats:
    size: int
    keys: tuple[str, ...]


@dataclass
class TTLCache(Generic[T]):
    """In-memory snapshot cache with a per-instance TTL.

    Entries are never mutated: a refresh swaps in a new CacheEntry. Writers
    take a ticket from `begin()` before going to the network; `put()` drops a
    write whose ticket is older than what is already stored (or older than the
    last `clear()`), so a slow request cannot clobber a newer refresh.
    """

    ttl_s: float
    _monotonic: Any = field(default=time.monotonic, repr=False)

    def __post_init__(self) -> None:
        self._entries: dict[str, CacheEntry[T]] = {}
        self._write_lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._cleared_seq = 0

    def get(self, key: str) -> CacheEntry[T] | None:
        return self._entries.get(key)

    def is_fresh(self, entry: CacheEntry[T]) -> bool:
        return (float(self._monotonic()) - entry.fetched_at) < self.ttl_s

    def begin(self) -> int:
        with self._write_lock:
            return next(self._tickets)

    def put(self, key: str, value: T, ticket: int) -> bool:
        entry = CacheEntry(value=value, fetched_at=float(self._monotonic()), seq=ticket)
        with self._write_lock:
            if ticket <= self._cleared_seq:
                return False
            current = self._entries.get(key)
            if current is not None and current.seq > ticket:
                return False
            self._entries[key] = entry
            return True

    def clear(self) -> None:
        with self._write_lock:
            self._entries = {}
            # Anything already in flight predates the clear.
            self._cleared_seq = next(self._tickets)

    def stats(self) -> CacheStats:
        keys = tuple(self._entries)
        return CacheStats(size=len(keys), keys=keys)
