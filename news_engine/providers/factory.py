"""Provider factory and registry for pluggable news sources."""

from __future__ import annotations

from ..config import ProviderConfig, get_api_key
from .base import NewsProvider
from .newsapi import NewsAPIProvider


ProviderBuilder = type[NewsProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "newsapi": NewsAPIProvider,
    "newsapi.org": NewsAPIProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(provider_cfg: ProviderConfig) -> NewsProvider:
    """Build a provider instance from runtime config."""
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    return builder(provider_cfg, api_key)


def create_providers(provider_cfgs: list[ProviderConfig]) -> list[NewsProvider]:
    return [create_provider(cfg) for cfg in provider_cfgs]
