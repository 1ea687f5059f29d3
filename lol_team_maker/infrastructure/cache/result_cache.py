"""In-process memoization of upstream fetches."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ResultCache(Generic[K, V]):
    """
    Collapses concurrent and repeated fetches of the same key into one
    upstream call.

    The first caller for a key stores the running task before awaiting it;
    later callers find the task and await the same outcome. Callers await
    through ``asyncio.shield`` so a caller that gives up (timeout,
    cancellation) leaves the fetch running and the result still lands in
    the cache.

    Failure policy:
      - remember_failures=False : a failed entry is evicted, the next call
                                  fetches fresh (match records).
      - remember_failures=True  : the failure is kept and re-raised to every
                                  later caller (pure de-duplication).
    Successful entries are never evicted.
    """

    def __init__(self, name: str = "cache", *, remember_failures: bool = False):
        self.name = name
        self.remember_failures = remember_failures
        self._entries: Dict[K, asyncio.Task] = {}
        self.hits = 0
        self.misses = 0

    async def get_or_fetch(self, key: K, fetch: Callable[[], Awaitable[V]]) -> V:
        task = self._entries.get(key)
        if task is None:
            self.misses += 1
            task = asyncio.ensure_future(fetch())
            self._entries[key] = task
            task.add_done_callback(lambda t, k=key: self._on_done(k, t))
        else:
            self.hits += 1
        return await asyncio.shield(task)

    def _on_done(self, key: K, task: asyncio.Task) -> None:
        if task.cancelled():
            self._evict(key, task)
            return
        # Reading the exception also marks it retrieved when nobody awaits it
        exc = task.exception()
        if exc is not None and not self.remember_failures:
            logger.debug(f"{self.name}: dropping failed entry {key!r}: {exc}")
            self._evict(key, task)

    def _evict(self, key: K, task: asyncio.Task) -> None:
        if self._entries.get(key) is task:
            del self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
