"""
Core data types for the news engine.

This module defines the structures that flow through the ingestion pipeline:
- Article: A single news item, enriched once with lexical scores
- QueryKey: Normalized cache key for one page of one query
- CacheEntry: A cached page of enriched articles
- Page: What the engine hands back to presentation layers
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
import logging
import re

from ..scoring.scorer import Scores

logger = logging.getLogger("news_engine.types")

DATE_FORMAT = "%Y-%m-%d"
_DATE_SHAPE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class Article:
    """A news item returned by a provider.

    The URL is the identity: two articles are the same entity iff their URLs
    are byte-equal. Scores stay ``None`` until the orchestrator enriches the
    article, after which the instance is never changed.

    Attributes:
        url: Canonical article URL (deduplication key)
        title: Headline, may be empty
        description: Provider-supplied description, may be empty
        published_at: ISO-8601 publish timestamp as returned by the provider
        thumbnail_url: Optional image URL
        source_name: Optional publication name
        sentiment_score: Lexical sentiment in [-100, 100]
        impact_score: Impact keyword score in [0, 100]
        policy_score: Policy relevance score in [0, 100]
    """

    url: str
    title: str = ""
    description: str = ""
    published_at: str = ""
    thumbnail_url: str | None = None
    source_name: str | None = None
    sentiment_score: int | None = None
    impact_score: int | None = None
    policy_score: int | None = None

    @property
    def is_enriched(self) -> bool:
        return self.sentiment_score is not None

    @property
    def scoring_text(self) -> str:
        """Text the scorer runs over: title and description joined by a space."""
        return f"{self.title} {self.description}"

    def with_scores(self, scores: Scores) -> Article:
        """Return an enriched copy of this article.

        Raises:
            ValueError: If the article has already been enriched
        """
        if self.is_enriched:
            raise ValueError(f"article already enriched: {self.url}")
        return replace(
            self,
            sentiment_score=scores.sentiment,
            impact_score=scores.impact,
            policy_score=scores.policy,
        )


def normalize_query(text: str) -> str:
    return text.strip().casefold()


def parse_date(value: str | None, field_name: str) -> str | None:
    """Validate an optional ``YYYY-MM-DD`` date string.

    Invalid values are dropped with a warning instead of failing the query.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not _is_valid_date(value):
        logger.warning(
            "Ignoring invalid '%s' date %r", field_name, value,
            extra={"event": "invalid_date", "field": field_name, "value": value},
        )
        return None
    return value


def _is_valid_date(value: str) -> bool:
    # strptime alone accepts unpadded fields such as "2026-1-5"
    if not _DATE_SHAPE_RE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class QueryKey:
    """Cache key for one page of one query.

    Build it with ``QueryKey.build`` so that semantically identical queries
    (surrounding whitespace, letter case, invalid dates) share an entry.

    Attributes:
        query: Normalized text, the cache identity
        text: Trimmed text as the caller wrote it, sent to providers; not part
            of equality or the hash
    """

    query: str
    from_date: str | None
    to_date: str | None
    page: int
    page_size: int
    text: str = field(default="", compare=False, hash=False)

    @classmethod
    def build(
        cls,
        query: str,
        from_date: str | None = None,
        to_date: str | None = None,
        page: int = 1,
        page_size: int = 18,
    ) -> QueryKey:
        return cls(
            query=normalize_query(query),
            text=query.strip(),
            from_date=parse_date(from_date, "from"),
            to_date=parse_date(to_date, "to"),
            page=page,
            page_size=page_size,
        )

    @property
    def provider_query(self) -> str:
        return self.text or self.query

    def next_page(self) -> QueryKey:
        return replace(self, page=self.page + 1)

    def __str__(self) -> str:
        return f"{self.query}:{self.from_date or ''}:{self.to_date or ''}:{self.page}:{self.page_size}"


@dataclass(frozen=True)
class CacheEntry:
    """One cached page.

    Attributes:
        articles: Enriched articles in provider order
        total_results: Total result count reported by the providers
        fetched_at: Time the entry was written (UTC)
    """

    articles: tuple[Article, ...]
    total_results: int
    fetched_at: datetime

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.fetched_at < ttl


@dataclass(frozen=True)
class Page:
    """A page of results as handed to presentation layers."""

    articles: tuple[Article, ...]
    total_results: int
    page: int
    page_size: int
    from_cache: bool = False

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total_results

    def __len__(self) -> int:
        return len(self.articles)
