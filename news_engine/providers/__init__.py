"""
News provider implementations.

This package contains the abstract base class and concrete implementations
for remote news sources (currently NewsAPI).

To add a new provider:
1. Inherit from NewsProvider and implement fetch_news()
2. Raise NewsEngineError subclasses for failures
3. Register the class in factory._PROVIDER_REGISTRY
"""

from .base import NewsProvider, ProviderResult
from .factory import available_providers, create_provider, create_providers
from .newsapi import NewsAPIProvider

__all__ = [
    "NewsProvider",
    "ProviderResult",
    "NewsAPIProvider",
    "available_providers",
    "create_provider",
    "create_providers",
]
