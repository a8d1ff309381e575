"""Debounced district search.

Each ``submit`` cancels the pending search and schedules a new one after a
quiet window. Only the most recently scheduled search may apply results,
so an older keystroke that finishes late never overwrites a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from korea_weather.schemas import SearchResult

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3

SearchFn = Callable[[str], Awaitable[list[SearchResult]]]
ResultsCallback = Callable[[str, list[SearchResult]], None]


class DebouncedSearch:
    """Last-scheduled-wins wrapper around a search coroutine."""

    def __init__(self, search: SearchFn, on_results: ResultsCallback, delay: float = DEBOUNCE_SECONDS) -> None:
        self._search = search
        self._on_results = on_results
        self.delay = delay
        self._task: asyncio.Task[list[SearchResult] | None] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, query: str) -> asyncio.Task[list[SearchResult] | None]:
        """Schedule ``query``, cancelling whatever was scheduled before it.

        Must be called from a running event loop.
        """
        self.cancel()
        self._task = asyncio.ensure_future(self._run(query))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> list[SearchResult] | None:
        """Await the latest scheduled search, following any newer ``submit``.

        Returns None when nothing was scheduled or the search was cancelled
        without a replacement.
        """
        while True:
            task = self._task
            if task is None:
                return None
            result = None
            try:
                result = await task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if not task.cancelled() or (current is not None and current.cancelling()):
                    raise
            if self._task is task:
                return result

    async def _run(self, query: str) -> list[SearchResult] | None:
        await asyncio.sleep(self.delay)
        results = await self._search(query)
        if self._task is not asyncio.current_task():
            logger.debug("Dropping stale results for %r", query)
            return None
        self._on_results(query, results)
        return results
