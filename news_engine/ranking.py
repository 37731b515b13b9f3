"""
Sorting and filtering over already-fetched articles.

The engine never re-sorts provider results; these helpers are for
presentation layers that offer their own ordering. All functions return
new lists and leave the input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from .core.types import Article

SORT_MODES = ("latest", "sentiment", "impact", "policy")


def sort_articles(articles: Iterable[Article], by: str = "latest", descending: bool = True) -> list[Article]:
    """Sort articles by publish time or by one of the scores.

    The sort is stable. Articles with an unparseable timestamp or no score
    always go last, whatever the direction.

    Raises:
        ValueError: If ``by`` is not one of SORT_MODES
    """
    if by not in SORT_MODES:
        raise ValueError(f"Unsupported sort mode: {by}. Supported: {', '.join(SORT_MODES)}")

    keyed = [(_sort_value(article, by), article) for article in articles]
    present = [(value, article) for value, article in keyed if value is not None]
    missing = [article for value, article in keyed if value is None]
    present.sort(key=lambda pair: pair[0], reverse=descending)
    return [article for _, article in present] + missing


def filter_by_sentiment(articles: Iterable[Article], positive: bool = True) -> list[Article]:
    """Keep strictly positive (or strictly negative) sentiment articles."""
    if positive:
        return [a for a in articles if (a.sentiment_score or 0) > 0]
    return [a for a in articles if (a.sentiment_score or 0) < 0]


def filter_by_impact(articles: Iterable[Article], threshold: int) -> list[Article]:
    return [a for a in articles if (a.impact_score or 0) >= threshold]


def parse_published_at(value: str) -> datetime | None:
    """Parse an ISO-8601 / RFC 3339 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_value(article: Article, by: str):
    if by == "latest":
        return parse_published_at(article.published_at)
    if by == "sentiment":
        return article.sentiment_score
    if by == "impact":
        return article.impact_score
    return article.policy_score
