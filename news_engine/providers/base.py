"""
Abstract base class for news providers.

New providers should inherit from NewsProvider and implement fetch_news.
The orchestrator only sees this interface, so several providers can be
aggregated without knowing their concrete types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..core.types import Article


@dataclass(frozen=True)
class ProviderResult:
    """One page of unscored articles from a single provider.

    Attributes:
        articles: Articles in the order the provider returned them
        total_results: Total matches the provider reports for the query
    """

    articles: list[Article] = field(default_factory=list)
    total_results: int = 0


class NewsProvider(ABC):
    """Capability: fetch one page of news for a query."""

    name: str = "provider"

    @abstractmethod
    async def fetch_news(
        self,
        query: str,
        from_date: str | None,
        to_date: str | None,
        page: int,
        page_size: int,
    ) -> ProviderResult:
        """Fetch one page of articles.

        Args:
            query: Search text
            from_date: Optional lower bound, ``YYYY-MM-DD``
            to_date: Optional upper bound, ``YYYY-MM-DD``
            page: 1-based page number
            page_size: Articles per page

        Returns:
            ProviderResult with unscored articles

        Raises:
            NewsEngineError: A subclass describing the failure kind
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
