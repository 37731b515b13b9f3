"""
Core domain models.

This package contains the data types shared by every pipeline stage and
the session-wide URL deduplication set.
"""

from .types import Article, CacheEntry, Page, QueryKey, normalize_query, parse_date
from .dedup import SeenArticles

__all__ = [
    "Article",
    "CacheEntry",
    "Page",
    "QueryKey",
    "normalize_query",
    "parse_date",
    "SeenArticles",
]
