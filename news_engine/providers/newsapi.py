"""
NewsAPI provider for the ``/v2/everything`` search endpoint.

One GET per page through a short-lived httpx.AsyncClient. Non-2xx responses
and ``status != "ok"`` payloads are mapped onto the engine error kinds; an
API-level ``code`` in the body wins over the HTTP status. The API key never
appears in raised messages.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ProviderConfig
from ..core.types import Article, parse_date
from ..errors import (
    BadQueryError,
    MalformedResponseError,
    NewsEngineError,
    RateLimitedError,
    UnauthorizedError,
    UnavailableError,
)
from ..logging_utils import log_event, redact_secrets
from .base import NewsProvider, ProviderResult

logger = logging.getLogger("news_engine.providers.newsapi")

# NewsAPI error codes, see https://newsapi.org/docs/errors
_ERROR_CODES: dict[str, type[NewsEngineError]] = {
    "rateLimited": RateLimitedError,
    "apiKeyDisabled": UnauthorizedError,
    "apiKeyExhausted": UnauthorizedError,
    "apiKeyInvalid": UnauthorizedError,
    "apiKeyMissing": UnauthorizedError,
    "parameterInvalid": BadQueryError,
    "parametersMissing": BadQueryError,
    "sourcesTooMany": BadQueryError,
    "sourceDoesNotExist": BadQueryError,
    "maximumResultsReached": BadQueryError,
    "unexpectedError": UnavailableError,
}


class NewsAPIProvider(NewsProvider):
    """Provider backed by the NewsAPI ``/v2/everything`` search endpoint."""

    name = "newsapi"

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg
        self.api_key = api_key
        self._transport = transport

    async def fetch_news(
        self,
        query: str,
        from_date: str | None,
        to_date: str | None,
        page: int,
        page_size: int,
    ) -> ProviderResult:
        if not self.api_key:
            raise UnauthorizedError("Missing NewsAPI key", provider=self.name)

        params = self._build_params(query, from_date, to_date, page, page_size)
        log_event(
            logger,
            "Provider request",
            level=logging.DEBUG,
            event="provider_request",
            provider=self.name,
            query=query,
            page=page,
            page_size=page_size,
        )
        data = await self._get(params)
        return _parse_response(data, self.name)

    def _build_params(
        self,
        query: str,
        from_date: str | None,
        to_date: str | None,
        page: int,
        page_size: int,
    ) -> dict[str, str]:
        params = {
            "q": query,
            "sortBy": self.cfg.sort_by,
            "language": self.cfg.language,
            "pageSize": str(page_size),
            "page": str(page),
            "apiKey": self.api_key or "",
        }
        from_value = parse_date(from_date, "from")
        if from_value:
            params["from"] = from_value
        to_value = parse_date(to_date, "to")
        if to_value:
            params["to"] = to_value
        return params

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self.cfg.timeout_seconds,
                trust_env=self.cfg.trust_env,
                transport=self._transport,
            ) as client:
                resp = await client.get(self.cfg.base_url, params=params)
        except httpx.TimeoutException as exc:
            raise UnavailableError(f"request timed out: {type(exc).__name__}", provider=self.name) from exc
        except httpx.HTTPError as exc:
            message = redact_secrets(f"{type(exc).__name__}: {exc}")
            raise UnavailableError(f"failed to connect to news service: {message}", provider=self.name) from exc

        payload = _decode_json(resp)
        if not resp.is_success:
            raise _error_for_status(resp.status_code, payload, self.name)
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"unparseable response body: {_snippet(resp.text)}",
                provider=self.name,
                status_code=resp.status_code,
            )
        if payload.get("status") != "ok":
            raise _error_for_payload(payload, self.name, resp.status_code)
        return payload


def _decode_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def _error_for_status(status_code: int, payload: Any, provider: str) -> NewsEngineError:
    """Map a non-200 response to an engine error.

    An API-level ``code`` in the body takes precedence over the status code.
    """
    if isinstance(payload, dict) and payload.get("code") in _ERROR_CODES:
        return _error_for_payload(payload, provider, status_code)
    message = _payload_message(payload) or f"HTTP {status_code}"
    if status_code == 429:
        cls: type[NewsEngineError] = RateLimitedError
    elif status_code in (401, 403):
        cls = UnauthorizedError
    elif 400 <= status_code < 500:
        cls = BadQueryError
    else:
        cls = UnavailableError
    return cls(f"API request failed with status {status_code}: {message}", provider=provider, status_code=status_code)


def _error_for_payload(payload: dict[str, Any], provider: str, status_code: int | None) -> NewsEngineError:
    code = str(payload.get("code") or "")
    cls = _ERROR_CODES.get(code, BadQueryError)
    message = _payload_message(payload) or payload.get("status") or "unknown error"
    label = f"{code}: {message}" if code else str(message)
    return cls(f"API error: {label}", provider=provider, status_code=status_code)


def _payload_message(payload: Any) -> str | None:
    if isinstance(payload, dict) and payload.get("message"):
        return redact_secrets(str(payload["message"]))
    return None


def _parse_response(data: dict[str, Any], provider: str) -> ProviderResult:
    raw_articles = data.get("articles")
    if raw_articles is None:
        raw_articles = []
    if not isinstance(raw_articles, list):
        raise MalformedResponseError("'articles' is not a list", provider=provider)
    try:
        total = int(data.get("totalResults") or 0)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"invalid totalResults: {data.get('totalResults')!r}", provider=provider) from exc

    articles: list[Article] = []
    skipped = 0
    for item in raw_articles:
        article = _parse_article(item)
        if article is None:
            skipped += 1
            continue
        articles.append(article)
    if skipped:
        log_event(
            logger,
            "Skipped articles without URL",
            level=logging.DEBUG,
            event="articles_skipped",
            provider=provider,
            count=skipped,
        )
    return ProviderResult(articles=articles, total_results=total)


def _parse_article(item: Any) -> Article | None:
    if not isinstance(item, dict):
        return None
    url = item.get("url")
    if not url:
        return None
    source = item.get("source") or {}
    source_name = source.get("name") if isinstance(source, dict) else None
    return Article(
        url=str(url),
        title=str(item.get("title") or ""),
        description=str(item.get("description") or ""),
        published_at=str(item.get("publishedAt") or ""),
        thumbnail_url=item.get("urlToImage") or None,
        source_name=source_name or None,
    )


def _snippet(text: str, max_chars: int = 200) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "...(truncated)"
