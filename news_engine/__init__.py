"""
News Engine - cached, scored news search.

This package fetches paged news search results from remote providers,
retries rate-limited calls, caches pages with a TTL, preloads the next
page in the background and scores every article for sentiment, impact
and policy relevance.

Main entry point for presentation layers is ``NewsEngine.query``; a
CLI is available via the ``news-engine search`` command.

Example:
    $ news-engine search "interest rates" --pages 2 --sort impact
"""

__all__ = [
    "__version__",
    "Article",
    "NewsEngine",
    "NewsEngineError",
    "Page",
    "PageCache",
    "QueryKey",
    "score_text",
]
__version__ = "0.1.0"

from .cache import PageCache
from .core.types import Article, Page, QueryKey
from .engine import NewsEngine
from .errors import NewsEngineError
from .scoring.scorer import score_text
