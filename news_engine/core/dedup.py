"""
Session-wide article deduplication by URL.

Articles are the same entity iff their URLs are byte-equal. The first
version seen for a URL is kept for the lifetime of the engine and is what
every later page returns for that URL.
"""

from __future__ import annotations

from collections.abc import Iterable
import threading

from .types import Article


class SeenArticles:
    """Lock-guarded URL -> Article map where the first insertion wins."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_url: dict[str, Article] = {}

    def merge(self, articles: Iterable[Article]) -> list[Article]:
        """Record articles and return their canonical versions.

        Unseen URLs are stored as given. Already-seen URLs are replaced in the
        returned list by the stored first-seen version; the stored entry is
        never overwritten. Order is preserved.

        Args:
            articles: Articles in page order

        Returns:
            The canonical article for each input, in the same order
        """
        canonical: list[Article] = []
        with self._lock:
            for article in articles:
                kept = self._by_url.setdefault(article.url, article)
                canonical.append(kept)
        return canonical

    def get(self, url: str) -> Article | None:
        with self._lock:
            return self._by_url.get(url)

    def snapshot(self) -> dict[str, Article]:
        with self._lock:
            return dict(self._by_url)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._by_url

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_url)
