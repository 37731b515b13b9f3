"""
Command-line interface for the news engine.

Uses Typer to expose a ``search`` command over NewsEngine. Supports loading
.env files for API key configuration.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config
from .core.types import Article, Page
from .engine import NewsEngine
from .errors import NewsEngineError
from .logging_utils import setup_logging
from .providers.factory import available_providers
from .ranking import SORT_MODES, filter_by_impact, filter_by_sentiment, parse_published_at, sort_articles
from .scoring.stocks import extract_stocks_from_articles

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text search query."),
    from_date: str | None = typer.Option(None, "--from", help="Earliest publish date (YYYY-MM-DD)."),
    to_date: str | None = typer.Option(None, "--to", help="Latest publish date (YYYY-MM-DD)."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="First page to show."),
    pages: int = typer.Option(1, "--pages", "-n", min=1, help="Number of consecutive pages to fetch."),
    sort: str | None = typer.Option(
        None, "--sort", help=f"Re-sort fetched articles: {', '.join(SORT_MODES)}."
    ),
    ascending: bool = typer.Option(False, "--asc/--desc", help="Sort direction."),
    sentiment: str | None = typer.Option(
        None, "--sentiment", help="Keep only positive or negative sentiment articles."
    ),
    min_impact: int | None = typer.Option(None, "--min-impact", help="Keep articles with impact >= N."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="NEWS_API_KEY",
        help="Override provider API key (or set NEWS_API_KEY / .env).",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    timeout: float | None = typer.Option(None, "--timeout", help="Deadline per page in seconds."),
    stocks: bool = typer.Option(False, "--stocks", help="List stocks and indices mentioned in the results."),
):
    """Search news and print scored results.

    Args:
        query: Search text
        from_date: Optional lower date bound
        to_date: Optional upper date bound
        page: First page number
        pages: How many pages to fetch starting at ``page``
        sort: Optional ordering applied to the fetched articles
        ascending: Sort direction
        sentiment: "positive" or "negative" filter
        min_impact: Minimum impact score filter
        config: Optional path to YAML config file
        api_key: Override provider API key
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        timeout: Per-page deadline
        stocks: Whether to list stock and index mentions below the table
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)
    if api_key:
        for provider_cfg in cfg.providers:
            provider_cfg.api_key = api_key
    if log_level:
        cfg.logging.level = log_level
    if sort is not None and sort not in SORT_MODES:
        raise typer.BadParameter(f"choose one of {', '.join(SORT_MODES)}", param_hint="--sort")
    if sentiment is not None and sentiment not in ("positive", "negative"):
        raise typer.BadParameter("choose positive or negative", param_hint="--sentiment")

    logger = setup_logging(cfg.logging)

    try:
        results = asyncio.run(_run_search(cfg, logger, query, from_date, to_date, page, pages, timeout))
    except NewsEngineError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1) from exc

    articles = [article for result in results for article in result.articles]
    if sentiment is not None:
        articles = filter_by_sentiment(articles, positive=sentiment == "positive")
    if min_impact is not None:
        articles = filter_by_impact(articles, min_impact)
    if sort is not None:
        articles = sort_articles(articles, by=sort, descending=not ascending)

    total = results[-1].total_results if results else 0
    _render_articles(articles, query, total)
    if stocks:
        _render_stock_mentions(articles)


@app.command()
def providers() -> None:
    """List registered provider names."""
    for name in available_providers():
        console.print(name)


async def _run_search(
    cfg: AppConfig,
    logger,
    query: str,
    from_date: str | None,
    to_date: str | None,
    page: int,
    pages: int,
    timeout: float | None,
) -> list[Page]:
    results: list[Page] = []
    async with NewsEngine.from_config(cfg, logger=logger) as engine:
        for number in range(page, page + pages):
            result = await engine.query(query, from_date, to_date, number, timeout=timeout)
            results.append(result)
            if not result.has_more:
                break
    return results


def _render_articles(articles: list[Article], query: str, total: int) -> None:
    table = Table(title=f"{query!r}: {len(articles)} shown of {total} results")
    table.add_column("Published", no_wrap=True)
    table.add_column("Source")
    table.add_column("Title")
    table.add_column("Sent.", justify="right")
    table.add_column("Impact", justify="right")
    table.add_column("Policy", justify="right")
    for article in articles:
        table.add_row(
            human_time(article.published_at),
            article.source_name or "",
            f"[link={article.url}]{article.title or article.url}[/link]",
            _signed(article.sentiment_score),
            str(article.impact_score or 0),
            f"{article.policy_score or 0}%",
        )
    console.print(table)


def _render_stock_mentions(articles: list[Article]) -> None:
    mentions = extract_stocks_from_articles(articles)
    if not mentions:
        console.print("No stock or index mentions.")
        return
    console.print("Mentioned: " + ", ".join(f"{m.symbol} ({m.kind})" for m in mentions))


def human_time(value: str, now: datetime | None = None) -> str:
    """Render a publish timestamp relative to now ("5m ago", "3h ago", ...)."""
    published = parse_published_at(value)
    if published is None:
        return value
    now = now or datetime.now(timezone.utc)
    seconds = int((now - published).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 7 * 86400:
        return f"{seconds // 86400}d ago"
    return published.strftime("%Y-%m-%d")


def _signed(score: int | None) -> str:
    value = score or 0
    color = "green" if value > 0 else "red" if value < 0 else "white"
    return f"[{color}]{value:+d}[/{color}]"


if __name__ == "__main__":
    app()
