"""
Engine façade: the single entry point for presentation layers.

``NewsEngine.query`` composes the page cache, the fetch orchestrator and
the session dedup set:

    get(key) -> fresh: return cached page
             -> miss/stale: fetch_page -> put -> dedup merge -> return
                            and preload page + 1 in the background

Errors from the orchestrator propagate unchanged; a failed refetch never
falls back to a stale entry.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import timedelta
import logging

from .cache import PageCache, PagePreloader
from .config import AppConfig
from .core.dedup import SeenArticles
from .core.types import Article, CacheEntry, Page, QueryKey
from .errors import BadQueryError, QueryCancelledError
from .fetcher import RetryPolicy, Sleep, fetch_page
from .logging_utils import log_event
from .providers.base import NewsProvider
from .providers.factory import create_providers
from .scoring.lexicon import DEFAULT_LEXICON, Lexicon


class NewsEngine:
    """Cached, deduplicating news search over one or more providers.

    Attributes:
        providers: Providers queried in order for every page
        cache: Page cache shared by foreground queries and preloads
        page_size: Articles requested per page
        preload_next_page: Whether a cache miss preloads the following page
    """

    def __init__(
        self,
        providers: Sequence[NewsProvider],
        cache: PageCache | None = None,
        *,
        page_size: int = 18,
        retry: RetryPolicy | None = None,
        lexicon: Lexicon = DEFAULT_LEXICON,
        preload_next_page: bool = True,
        logger: logging.Logger | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if not providers:
            raise ValueError("At least one provider is required")
        self.providers = list(providers)
        self.cache = cache or PageCache()
        self.page_size = page_size
        self.preload_next_page = preload_next_page
        self._retry = retry or RetryPolicy()
        self._lexicon = lexicon
        self._logger = logger or logging.getLogger("news_engine.engine")
        self._sleep = sleep
        self._seen = SeenArticles()
        self._preloader = PagePreloader(self.cache, self._load_page, self._logger)

    @classmethod
    def from_config(cls, cfg: AppConfig, logger: logging.Logger | None = None) -> NewsEngine:
        """Build an engine with providers, cache and retry policy from config."""
        return cls(
            create_providers(cfg.providers),
            PageCache(ttl=timedelta(seconds=cfg.cache.ttl_seconds)),
            page_size=cfg.fetch.page_size,
            retry=RetryPolicy(
                max_retries=cfg.fetch.max_retries,
                delay_seconds=cfg.fetch.retry_delay_seconds,
            ),
            preload_next_page=cfg.cache.preload_next_page,
            logger=logger,
        )

    async def query(
        self,
        text: str,
        from_date: str | None = None,
        to_date: str | None = None,
        page: int = 1,
        *,
        timeout: float | None = None,
    ) -> Page:
        """Return one page of enriched, deduplicated articles.

        Args:
            text: Free-text search query
            from_date: Optional ``YYYY-MM-DD`` lower bound (invalid values are ignored)
            to_date: Optional ``YYYY-MM-DD`` upper bound (invalid values are ignored)
            page: 1-based page number
            timeout: Optional deadline in seconds for the whole call

        Returns:
            Page with articles in provider order

        Raises:
            BadQueryError: Empty query text or page < 1
            QueryCancelledError: The deadline elapsed; nothing was cached
            NewsEngineError: Any provider failure, unchanged
        """
        if not text or not text.strip():
            raise BadQueryError("query text is empty")
        if page < 1:
            raise BadQueryError(f"page must be >= 1, got {page}")
        key = QueryKey.build(text, from_date, to_date, page, self.page_size)

        if timeout is None:
            return await self._query(key)
        try:
            return await asyncio.wait_for(self._query(key), timeout)
        except asyncio.TimeoutError:
            log_event(
                self._logger,
                "Query cancelled",
                level=logging.WARNING,
                event="query_cancelled",
                key=str(key),
                timeout_seconds=timeout,
            )
            raise QueryCancelledError(f"query exceeded {timeout}s deadline") from None

    async def _query(self, key: QueryKey) -> Page:
        entry = self.cache.get(key)
        if entry is None and await self._preloader.wait_for(key):
            entry = self.cache.get(key)
        if entry is not None:
            log_event(self._logger, "Cache hit", event="cache_hit", key=str(key))
            return self._build_page(key, entry, from_cache=True)

        log_event(self._logger, "Cache miss", event="cache_miss", key=str(key))
        articles, total_results = await self._load_page(key)
        entry = self.cache.put(key, articles, total_results)
        result = self._build_page(key, entry, from_cache=False)
        if self.preload_next_page and result.has_more:
            self._preloader.schedule(key.next_page())
        return result

    async def _load_page(self, key: QueryKey) -> tuple[list[Article], int]:
        result = await fetch_page(
            self.providers,
            key,
            retry=self._retry,
            lexicon=self._lexicon,
            logger=self._logger,
            sleep=self._sleep,
        )
        return result.articles, result.total_results

    def _build_page(self, key: QueryKey, entry: CacheEntry, from_cache: bool) -> Page:
        return Page(
            articles=tuple(self._seen.merge(entry.articles)),
            total_results=entry.total_results,
            page=key.page,
            page_size=key.page_size,
            from_cache=from_cache,
        )

    def seen_article(self, url: str) -> Article | None:
        """Return the first-seen version of an article, if it was ever returned."""
        return self._seen.get(url)

    def seen_articles(self) -> dict[str, Article]:
        """Snapshot of every article returned this session, keyed by URL."""
        return self._seen.snapshot()

    @property
    def pending_preloads(self) -> int:
        return len(self._preloader)

    async def wait_for_preloads(self) -> None:
        """Wait until every in-flight preload has finished."""
        await self._preloader.wait_all()

    async def aclose(self) -> None:
        """Cancel in-flight preloads and release provider resources."""
        await self._preloader.aclose()
        for provider in self.providers:
            await provider.aclose()

    async def __aenter__(self) -> NewsEngine:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
