"""Tests for the NewsAPI provider using httpx.MockTransport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from news_engine.config import ProviderConfig
from news_engine.errors import (
    BadQueryError,
    MalformedResponseError,
    RateLimitedError,
    UnauthorizedError,
    UnavailableError,
)
from news_engine.providers.newsapi import NewsAPIProvider


OK_BODY = {
    "status": "ok",
    "totalResults": 42,
    "articles": [
        {
            "source": {"id": None, "name": "Example Times"},
            "title": "Markets rally",
            "description": "Stocks rise on strong results",
            "url": "https://example.com/a",
            "urlToImage": "https://example.com/a.jpg",
            "publishedAt": "2026-01-02T10:00:00Z",
        },
        {
            "source": None,
            "title": None,
            "description": None,
            "url": "https://example.com/b",
            "urlToImage": None,
            "publishedAt": "2026-01-02T09:00:00Z",
        },
        {"title": "No URL, skipped", "url": None},
    ],
}


def _provider(handler, api_key: str | None = "secret-key") -> NewsAPIProvider:
    return NewsAPIProvider(ProviderConfig(), api_key, transport=httpx.MockTransport(handler))


def _fetch(provider: NewsAPIProvider, from_date=None, to_date=None):
    return asyncio.run(provider.fetch_news("interest rates", from_date, to_date, 2, 18))


def test_fetch_parses_articles_and_sends_expected_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_BODY)

    result = _fetch(_provider(handler), from_date="2026-01-01", to_date="2026-01-31")

    params = seen[0].url.params
    assert seen[0].url.path == "/v2/everything"
    assert params["q"] == "interest rates"
    assert params["sortBy"] == "publishedAt"
    assert params["language"] == "en"
    assert params["pageSize"] == "18"
    assert params["page"] == "2"
    assert params["from"] == "2026-01-01"
    assert params["to"] == "2026-01-31"
    assert params["apiKey"] == "secret-key"

    assert result.total_results == 42
    assert [a.url for a in result.articles] == ["https://example.com/a", "https://example.com/b"]
    first, second = result.articles
    assert first.title == "Markets rally"
    assert first.source_name == "Example Times"
    assert first.thumbnail_url == "https://example.com/a.jpg"
    assert first.published_at == "2026-01-02T10:00:00Z"
    assert not first.is_enriched
    assert second.title == "" and second.description == ""
    assert second.source_name is None and second.thumbnail_url is None


def test_invalid_dates_are_dropped_with_warning(caplog):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "ok", "totalResults": 0, "articles": []})

    with caplog.at_level("WARNING", logger="news_engine"):
        _fetch(_provider(handler), from_date="2026/01/01", to_date="2026-02-30")

    params = seen[0].url.params
    assert "from" not in params
    assert "to" not in params
    assert len([r for r in caplog.records if getattr(r, "event", None) == "invalid_date"]) == 2


@pytest.mark.parametrize(
    ("status", "body", "error_cls"),
    [
        (429, {"status": "error", "code": "rateLimited", "message": "Too many requests"}, RateLimitedError),
        (429, None, RateLimitedError),
        (401, {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid"}, UnauthorizedError),
        (403, None, UnauthorizedError),
        (400, {"status": "error", "code": "parameterInvalid", "message": "bad q"}, BadQueryError),
        (426, None, BadQueryError),
        (500, {"status": "error", "code": "unexpectedError", "message": "boom"}, UnavailableError),
        (503, None, UnavailableError),
    ],
)
def test_http_errors_map_to_error_kinds(status, body, error_cls):
    def handler(request: httpx.Request) -> httpx.Response:
        if body is None:
            return httpx.Response(status, text="<html>error</html>")
        return httpx.Response(status, json=body)

    with pytest.raises(error_cls) as exc_info:
        _fetch(_provider(handler))
    assert exc_info.value.status_code == status
    assert exc_info.value.provider == "newsapi"


def test_error_payload_with_ok_http_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "error", "code": "apiKeyMissing", "message": "missing"})

    with pytest.raises(UnauthorizedError, match="apiKeyMissing"):
        _fetch(_provider(handler))


def test_unparseable_body_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json at all")

    with pytest.raises(MalformedResponseError):
        _fetch(_provider(handler))


def test_articles_of_wrong_type_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ok", "totalResults": 1, "articles": {"url": "x"}})

    with pytest.raises(MalformedResponseError):
        _fetch(_provider(handler))


def test_network_errors_are_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UnavailableError):
        _fetch(_provider(handler))


def test_timeouts_are_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UnavailableError, match="timed out"):
        _fetch(_provider(handler))


def test_missing_api_key_fails_without_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=OK_BODY)

    with pytest.raises(UnauthorizedError):
        _fetch(_provider(handler, api_key=None))
    assert calls == []


def test_api_key_is_redacted_from_error_messages():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"status": "error", "message": f"bad url {request.url}"})

    with pytest.raises(UnauthorizedError) as exc_info:
        _fetch(_provider(handler))
    assert "secret-key" not in str(exc_info.value)


def test_any_2xx_status_is_accepted():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(203, json=OK_BODY)

    result = _fetch(_provider(handler))

    assert result.total_results == 42
    assert len(result.articles) == 2
