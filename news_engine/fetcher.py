"""
Page fetching across providers with retry and enrichment.

For one cache key this module:
1. Calls each provider in order (sequentially, never fanned out)
2. Retries rate-limited calls with linear backoff
3. Scores every returned article exactly once
4. Concatenates the pages in provider order and sums their totals

A failing provider contributes nothing; only when every provider fails is
an error raised.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
import logging

from .core.types import Article, QueryKey
from .errors import AllProvidersFailedError, NewsEngineError, RateLimitedError
from .logging_utils import log_event
from .providers.base import NewsProvider, ProviderResult
from .scoring.lexicon import DEFAULT_LEXICON, Lexicon
from .scoring.scorer import score_text

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings for rate-limited provider calls.

    Attributes:
        max_retries: Retries after the first attempt (total calls = max_retries + 1)
        delay_seconds: Backoff step; the n-th retry waits ``n * delay_seconds``
    """

    max_retries: int = 3
    delay_seconds: float = 1.0

    def delay_for(self, attempt: int) -> float:
        return attempt * self.delay_seconds


@dataclass
class FetchResult:
    """Enriched page assembled from all providers.

    Attributes:
        articles: Scored articles, provider order then provider page order
        total_results: Sum of the totals reported by successful providers
        errors: Errors of providers that failed while others succeeded
    """

    articles: list[Article] = field(default_factory=list)
    total_results: int = 0
    errors: list[NewsEngineError] = field(default_factory=list)


async def fetch_page(
    providers: Sequence[NewsProvider],
    key: QueryKey,
    *,
    retry: RetryPolicy | None = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
    logger: logging.Logger | None = None,
    sleep: Sleep = asyncio.sleep,
) -> FetchResult:
    """Fetch and enrich one page from every provider.

    Args:
        providers: Providers to call, in order
        key: Normalized query, date range and page
        retry: Rate-limit retry policy
        lexicon: Keyword tables used for scoring
        logger: Logger for structured events
        sleep: Awaitable used between retries (cancellable)

    Returns:
        FetchResult with the concatenated enriched articles

    Raises:
        NewsEngineError: The provider's own error when the only provider fails
        AllProvidersFailedError: When several providers are configured and all fail
        ValueError: If no providers are configured
    """
    if not providers:
        raise ValueError("At least one provider is required")
    retry = retry or RetryPolicy()
    logger = logger or logging.getLogger("news_engine.fetcher")

    result = FetchResult()
    for provider in providers:
        try:
            page = await _fetch_with_retry(provider, key, retry, logger, sleep)
        except NewsEngineError as exc:
            result.errors.append(exc)
            log_event(
                logger,
                f"Provider failed: {exc}",
                level=logging.WARNING,
                event="provider_failed",
                provider=provider.name,
                error_kind=exc.kind,
                status_code=exc.status_code,
                key=str(key),
            )
            continue

        result.articles.extend(enrich_articles(page.articles, lexicon))
        result.total_results += page.total_results
        log_event(
            logger,
            "Provider fetch",
            event="provider_fetch",
            provider=provider.name,
            key=str(key),
            count=len(page.articles),
            total_results=page.total_results,
        )

    if len(result.errors) == len(providers):
        if len(providers) == 1:
            raise result.errors[0]
        raise AllProvidersFailedError(result.errors) from result.errors[-1]
    return result


def enrich_articles(articles: Sequence[Article], lexicon: Lexicon = DEFAULT_LEXICON) -> list[Article]:
    """Score each article once and return the enriched copies in order."""
    return [article.with_scores(score_text(article.scoring_text, lexicon)) for article in articles]


async def _fetch_with_retry(
    provider: NewsProvider,
    key: QueryKey,
    retry: RetryPolicy,
    logger: logging.Logger,
    sleep: Sleep,
) -> ProviderResult:
    attempt = 0
    while True:
        try:
            return await provider.fetch_news(
                key.provider_query, key.from_date, key.to_date, key.page, key.page_size
            )
        except RateLimitedError:
            if attempt >= retry.max_retries:
                raise
            attempt += 1
            delay = retry.delay_for(attempt)
            log_event(
                logger,
                "Rate limit hit, retrying",
                level=logging.WARNING,
                event="rate_limited",
                provider=provider.name,
                attempt=attempt,
                delay_seconds=delay,
                key=str(key),
            )
            await sleep(delay)
