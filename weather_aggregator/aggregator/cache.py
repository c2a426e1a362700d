"""
In-memory cache for aggregated weather.

Entries are never expired proactively. An entry older than the TTL is
treated as missing on read and is overwritten by the next aggregation for
the same key, or dropped by `CacheStore.clear`.
"""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .types import AggregatedWeather


def utc_now() -> datetime:
    return datetime.now(UTC)


class ReadWriteLock:
    """
    A lock allowing many concurrent readers or a single writer.

    New readers queue behind a waiting writer, so a steady stream of reads
    cannot keep a write out forever.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            while self._writing or self._writers_waiting:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if not self._readers:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()


@dataclass(frozen=True)
class CacheEntry:
    value: AggregatedWeather
    created_at: datetime


class CacheStore:
    """
    Key-value store of aggregated weather with a single TTL for all entries.
    """

    def __init__(
        self, ttl_minutes: int, *, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def get(self, key: str) -> AggregatedWeather | None:
        with self._lock.read():
            entry = self._entries.get(key)

        if entry is None or self.is_stale(entry):
            return None

        return entry.value

    def put(self, key: str, value: AggregatedWeather) -> None:
        entry = CacheEntry(value=value, created_at=self._clock())
        with self._lock.write():
            self._entries[key] = entry

    def clear(self) -> None:
        with self._lock.write():
            self._entries = {}

    def is_stale(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at > self._ttl
