"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: One remote news source (a list of them is allowed)
- FetchConfig: Page size and retry settings
- CacheConfig: TTL and next-page preload settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProviderConfig:
    """Configuration for a news provider.

    Attributes:
        name: Registered provider name ("newsapi")
        base_url: Search endpoint URL
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable name containing the API key
        language: Article language filter sent to the provider
        sort_by: Provider-side ordering
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
    """

    name: str = "newsapi"
    base_url: str = "https://newsapi.org/v2/everything"
    api_key: str | None = None
    api_key_env: str = "NEWS_API_KEY"
    language: str = "en"
    sort_by: str = "publishedAt"
    timeout_seconds: float = 15.0
    trust_env: bool = True


@dataclass
class FetchConfig:
    """Configuration for page fetching.

    Attributes:
        page_size: Articles requested per page
        max_retries: Retries after a rate-limited provider call
        retry_delay_seconds: Linear backoff step (attempt * step)
    """

    page_size: int = 18
    max_retries: int = 3
    retry_delay_seconds: float = 1.0


@dataclass
class CacheConfig:
    """Configuration for the in-memory page cache.

    Attributes:
        ttl_seconds: Age after which an entry is stale and refetched
        preload_next_page: Whether a cache miss also preloads the next page
    """

    ttl_seconds: float = 600.0
    preload_next_page: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "news_engine.jsonl"
    directory: str = "logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    providers: list[ProviderConfig] = field(default_factory=lambda: [ProviderConfig()])
    fetch: FetchConfig = field(default_factory=FetchConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if key == "providers":
            if isinstance(value, dict):
                value = [value]
            data[key] = [_known_fields(ProviderConfig, item) for item in value or []]
        elif isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _known_fields(cls: type, raw: dict[str, Any]) -> dict[str, Any]:
    """Drop keys a config dataclass does not declare."""
    return {k: v for k, v in (raw or {}).items() if k in cls.__dataclass_fields__}


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "providers": [
            {
                "name": p.name,
                "base_url": p.base_url,
                "api_key": p.api_key,
                "api_key_env": p.api_key_env,
                "language": p.language,
                "sort_by": p.sort_by,
                "timeout_seconds": p.timeout_seconds,
                "trust_env": p.trust_env,
            }
            for p in cfg.providers
        ],
        "fetch": {
            "page_size": cfg.fetch.page_size,
            "max_retries": cfg.fetch.max_retries,
            "retry_delay_seconds": cfg.fetch.retry_delay_seconds,
        },
        "cache": {
            "ttl_seconds": cfg.cache.ttl_seconds,
            "preload_next_page": cfg.cache.preload_next_page,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        providers=[ProviderConfig(**p) for p in data["providers"]],
        fetch=FetchConfig(**_known_fields(FetchConfig, data["fetch"])),
        cache=CacheConfig(**_known_fields(CacheConfig, data["cache"])),
        logging=LoggingConfig(**_known_fields(LoggingConfig, data["logging"])),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
