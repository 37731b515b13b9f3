"""
Error taxonomy for the ingestion engine.

Every failure that can reach a caller of ``NewsEngine.query`` is a
``NewsEngineError`` subclass carrying a short ``kind`` label, so that
presentation layers can show ``kind: message`` verbatim.
"""

from __future__ import annotations


class NewsEngineError(Exception):
    """Base class for all engine errors."""

    kind = "error"

    def __init__(self, message: str, *, provider: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class RateLimitedError(NewsEngineError):
    """Provider refused the request because of rate limiting. Retried internally."""

    kind = "rate_limited"


class UnauthorizedError(NewsEngineError):
    """Missing, invalid or disabled credential."""

    kind = "unauthorized"


class BadQueryError(NewsEngineError):
    """The provider (or local validation) rejected the query parameters."""

    kind = "bad_query"


class UnavailableError(NewsEngineError):
    """Network failure, timeout or 5xx from the provider."""

    kind = "unavailable"


class MalformedResponseError(NewsEngineError):
    """Response body could not be parsed into the expected shape."""

    kind = "malformed"


class AllProvidersFailedError(NewsEngineError):
    """Every configured provider failed for a page request.

    Attributes:
        errors: Per-provider errors in provider order
        last_error: The error of the last provider tried
    """

    kind = "all_providers_failed"

    def __init__(self, errors: list[NewsEngineError]):
        last = errors[-1]
        super().__init__(f"all {len(errors)} providers failed; last error: {last}")
        self.errors = list(errors)
        self.last_error = last


class QueryCancelledError(NewsEngineError):
    """The caller's deadline elapsed before the query completed."""

    kind = "cancelled"
