"""In-process query cache with TTL and request coalescing.

Entries are never persisted; stale ones are evicted on the next miss. Concurrent
``get()`` calls for the same key share one producer invocation; failures
are not cached, so the next call tries again immediately.

Usage::

    cache = QueryCache()
    snapshot = await cache.get(
        ("current", lat, lon),
        CURRENT_WEATHER_TTL_MS,
        lambda: client.get_current_weather(coord),
    )
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from functools import partial
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CURRENT_WEATHER_TTL_MS = 5 * 60 * 1000
FORECAST_TTL_MS = 30 * 60 * 1000
EXTREMES_TTL_MS = 30 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and when it was fetched."""

    value: T
    fetched_at_ms: int
    ttl_ms: int

    def is_stale(self, now_ms: int) -> bool:
        return now_ms - self.fetched_at_ms > self.ttl_ms


class QueryCache:
    """Keyed TTL cache; keys are structural tuples such as ``(topic, lat, lon)``.

    Keys are compared as given (no rounding), so callers must pass
    consistent coordinates to hit the cache.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[Any]] = {}
        self._in_flight: dict[Hashable, asyncio.Task[Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: Hashable, ttl_ms: int, producer: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key``, producing it at most once at a time."""
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None and not entry.is_stale(now):
            logger.debug("Cache hit for %r", key)
            return entry.value  # type: ignore[no-any-return]

        task = self._in_flight.get(key)
        if task is None:
            logger.debug("Cache miss for %r, fetching", key)
            self.prune(now)
            task = asyncio.ensure_future(self._produce(key, ttl_ms, producer))
            task.add_done_callback(partial(_retrieve_failure, key))
            self._in_flight[key] = task
        else:
            logger.debug("Joining in-flight fetch for %r", key)
        # A cancelled caller must not cancel the fetch other callers wait on
        return await asyncio.shield(task)  # type: ignore[no-any-return]

    async def _produce(self, key: Hashable, ttl_ms: int, producer: Callable[[], Awaitable[T]]) -> T:
        this = asyncio.current_task()
        try:
            value = await producer()
            # An invalidated fetch still answers its own waiters but is not stored
            if self._in_flight.get(key) is this:
                self._entries[key] = CacheEntry(value=value, fetched_at_ms=self._clock(), ttl_ms=ttl_ms)
            return value
        finally:
            if self._in_flight.get(key) is this:
                del self._in_flight[key]

    def peek(self, key: Hashable) -> CacheEntry[Any] | None:
        """The stored entry for ``key``, fresh or stale, without fetching."""
        return self._entries.get(key)

    def prune(self, now_ms: int | None = None) -> int:
        """Evict stale entries and return how many were dropped."""
        now = self._clock() if now_ms is None else now_ms
        stale = [key for key, entry in self._entries.items() if entry.is_stale(now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def invalidate(self, key: Hashable) -> None:
        """Drop the entry for ``key`` and detach any fetch in flight for it."""
        self._entries.pop(key, None)
        self._in_flight.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
        self._in_flight.clear()


def _retrieve_failure(key: Hashable, task: asyncio.Task[Any]) -> None:
    # Waiters may all have been cancelled; read the failure so it is not reported as unretrieved
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Fetch for %r failed: %r", key, task.exception())
