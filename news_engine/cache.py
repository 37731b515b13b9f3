"""
In-memory page cache with TTL freshness.

Entries are keyed by QueryKey and never evicted; an entry older than the
TTL is reported as a miss by ``get`` but stays in the map until a refetch
replaces it. A single lock guards the map and every write is one dict
assignment, so readers never observe a partially written entry.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
import threading

from .core.types import Article, CacheEntry, QueryKey
from .errors import NewsEngineError
from .logging_utils import log_event

Clock = Callable[[], datetime]
PageLoader = Callable[[QueryKey], Awaitable[tuple[Sequence[Article], int]]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CacheStats:
    """Counters for cache lookups.

    Attributes:
        hits: Lookups answered with a fresh entry
        misses: Lookups with no entry
        stale: Lookups that found an entry older than the TTL
        entries: Entries currently stored (fresh or stale)
    """

    hits: int = 0
    misses: int = 0
    stale: int = 0
    entries: int = 0


class PageCache:
    """Thread-safe QueryKey -> CacheEntry store.

    Attributes:
        ttl: Age after which an entry is stale
    """

    def __init__(self, ttl: timedelta = timedelta(minutes=10), clock: Clock = utc_now):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._stale = 0

    def get(self, key: QueryKey) -> CacheEntry | None:
        """Return the entry for ``key`` if it exists and is fresh."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if not entry.is_fresh(now, self.ttl):
                self._stale += 1
                return None
            self._hits += 1
            return entry

    def peek(self, key: QueryKey) -> CacheEntry | None:
        """Return the stored entry regardless of freshness, without counting."""
        with self._lock:
            return self._entries.get(key)

    def is_fresh(self, key: QueryKey) -> bool:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and entry.is_fresh(now, self.ttl)

    def put(self, key: QueryKey, articles: Sequence[Article], total_results: int) -> CacheEntry:
        """Store a page, replacing any previous entry for ``key``.

        ``fetched_at`` is set here, at write time.
        """
        entry = CacheEntry(articles=tuple(articles), total_results=total_results, fetched_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def invalidate(self, key: QueryKey | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                stale=self._stale,
                entries=len(self._entries),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


class PagePreloader:
    """Fire-and-forget background loading of pages into a PageCache.

    ``schedule`` starts at most one task per key and returns immediately.
    Failures are logged with ``event="preload_failed"`` and never raised;
    a foreground request can ``wait_for`` an in-flight preload instead of
    issuing a second provider call for the same key.
    """

    def __init__(self, cache: PageCache, loader: PageLoader, logger: logging.Logger | None = None):
        self.cache = cache
        self._loader = loader
        self._logger = logger or logging.getLogger("news_engine.cache")
        self._tasks: dict[QueryKey, asyncio.Task[None]] = {}

    def schedule(self, key: QueryKey) -> asyncio.Task[None] | None:
        """Start preloading ``key`` unless it is fresh or already in flight.

        Must be called from a running event loop.
        """
        if self.cache.is_fresh(key):
            return None
        existing = self._tasks.get(key)
        if existing is not None and not existing.done():
            return None

        task = asyncio.create_task(self._run(key), name=f"preload:{key}")
        self._tasks[key] = task
        task.add_done_callback(lambda done, key=key: self._forget(key, done))
        return task

    def pending(self, key: QueryKey) -> asyncio.Task[None] | None:
        task = self._tasks.get(key)
        if task is None or task.done():
            return None
        return task

    async def wait_for(self, key: QueryKey) -> bool:
        """Wait for an in-flight preload of ``key``.

        The preload is shielded, so cancelling the waiter leaves it running.

        Returns:
            True if a preload was in flight and has finished
        """
        task = self.pending(key)
        if task is None:
            return False
        await asyncio.shield(task)
        return True

    async def wait_all(self) -> None:
        tasks = [task for task in self._tasks.values() if not task.done()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def aclose(self) -> None:
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def __len__(self) -> int:
        return sum(1 for task in self._tasks.values() if not task.done())

    async def _run(self, key: QueryKey) -> None:
        log_event(self._logger, "Preload start", level=logging.DEBUG, event="preload_start", key=str(key))
        try:
            articles, total_results = await self._loader(key)
        except NewsEngineError as exc:
            log_event(
                self._logger,
                f"Failed to preload next page: {exc}",
                level=logging.WARNING,
                event="preload_failed",
                key=str(key),
                error_kind=exc.kind,
                error=exc.message,
            )
            return
        except Exception as exc:  # noqa: BLE001
            self._logger.exception(
                "Unexpected preload failure",
                extra={"event": "preload_failed", "key": str(key), "error_kind": type(exc).__name__},
            )
            return
        self.cache.put(key, articles, total_results)
        log_event(
            self._logger,
            "Preload stored",
            level=logging.DEBUG,
            event="preload_stored",
            key=str(key),
            count=len(articles),
        )

    def _forget(self, key: QueryKey, task: asyncio.Task[None]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
