"""Tests for presentation-side sorting and filtering."""

from datetime import datetime, timezone

import pytest

from news_engine.core.types import Article
from news_engine.ranking import filter_by_impact, filter_by_sentiment, parse_published_at, sort_articles


def _article(url, published_at="", sentiment=None, impact=None, policy=None):
    return Article(
        url=url,
        published_at=published_at,
        sentiment_score=sentiment,
        impact_score=impact,
        policy_score=policy,
    )


ARTICLES = [
    _article("a", "2026-01-01T08:00:00Z", sentiment=10, impact=5, policy=0),
    _article("b", "2026-01-02T08:00:00Z", sentiment=-20, impact=40, policy=10),
    _article("c", "not a date", sentiment=0, impact=None, policy=30),
    _article("d", "2026-01-01T09:00:00+01:00", sentiment=30, impact=5, policy=None),
]


def test_sort_latest_first_with_unparseable_last():
    assert [a.url for a in sort_articles(ARTICLES)] == ["b", "a", "d", "c"]


def test_sort_oldest_first_keeps_missing_last():
    assert [a.url for a in sort_articles(ARTICLES, descending=False)] == ["a", "d", "b", "c"]


def test_sort_by_impact_is_stable():
    assert [a.url for a in sort_articles(ARTICLES, by="impact")] == ["b", "a", "d", "c"]


def test_sort_by_sentiment_and_policy():
    assert [a.url for a in sort_articles(ARTICLES, by="sentiment")] == ["d", "a", "c", "b"]
    assert [a.url for a in sort_articles(ARTICLES, by="policy")] == ["c", "b", "a", "d"]


def test_sort_rejects_unknown_mode():
    with pytest.raises(ValueError, match="Unsupported sort mode"):
        sort_articles(ARTICLES, by="popularity")


def test_sort_leaves_input_untouched():
    original = list(ARTICLES)
    sort_articles(ARTICLES, by="sentiment")
    assert ARTICLES == original


def test_filter_by_sentiment():
    assert [a.url for a in filter_by_sentiment(ARTICLES)] == ["a", "d"]
    assert [a.url for a in filter_by_sentiment(ARTICLES, positive=False)] == ["b"]


def test_filter_by_impact():
    assert [a.url for a in filter_by_impact(ARTICLES, 5)] == ["a", "b", "d"]
    assert [a.url for a in filter_by_impact(ARTICLES, 41)] == []


def test_parse_published_at():
    assert parse_published_at("2026-01-02T08:00:00Z") == datetime(2026, 1, 2, 8, tzinfo=timezone.utc)
    assert parse_published_at("2026-01-02T08:00:00") == datetime(2026, 1, 2, 8, tzinfo=timezone.utc)
    assert parse_published_at("") is None
    assert parse_published_at("yesterday") is None
