"""Tests for the Typer CLI."""

from datetime import datetime, timezone
import logging

import pytest
from typer.testing import CliRunner

from fakes import FakeProvider, make_article
from news_engine import cli
from news_engine.engine import NewsEngine
from news_engine.errors import UnauthorizedError


runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_package_logger():
    yield
    logger = logging.getLogger("news_engine")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_engine(monkeypatch):
    provider = FakeProvider(
        {
            1: [make_article(1, title="Shares rise"), make_article(2, title="Factory loss")],
            2: [make_article(3, title="New law")],
        },
        total_results=36,
    )

    def from_config(cfg, logger=None):
        return NewsEngine([provider], page_size=cfg.fetch.page_size, preload_next_page=False, logger=logger)

    monkeypatch.setattr(cli.NewsEngine, "from_config", from_config)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    return provider


def test_search_renders_table(fake_engine):
    result = runner.invoke(cli.app, ["search", "Markets", "--api-key", "k"])

    assert result.exit_code == 0, result.output
    assert "Shares rise" in result.output
    assert "Factory loss" in result.output
    assert fake_engine.calls == [("Markets", None, None, 1, 18)]


def test_search_fetches_consecutive_pages_and_filters(fake_engine):
    result = runner.invoke(
        cli.app, ["search", "markets", "--pages", "3", "--sentiment", "negative", "--api-key", "k"]
    )

    assert result.exit_code == 0, result.output
    assert [call[3] for call in fake_engine.calls] == [1, 2]
    assert "Factory loss" in result.output
    assert "Shares rise" not in result.output


def test_search_rejects_unknown_sort(fake_engine):
    result = runner.invoke(cli.app, ["search", "markets", "--sort", "popularity"])
    assert result.exit_code != 0
    assert fake_engine.calls == []


def test_search_reports_engine_errors(fake_engine):
    fake_engine.responses[1] = UnauthorizedError("Your API key is invalid")

    result = runner.invoke(cli.app, ["search", "markets", "--api-key", "k"])

    assert result.exit_code == 1
    assert "unauthorized: Your API key is invalid" in result.output


def test_providers_command_lists_registry():
    result = runner.invoke(cli.app, ["providers"])
    assert result.exit_code == 0
    assert "newsapi" in result.output.split()


@pytest.mark.parametrize(
    ("published", "expected"),
    [
        ("2026-01-01T11:59:30Z", "just now"),
        ("2026-01-01T11:15:00Z", "45m ago"),
        ("2026-01-01T07:00:00Z", "5h ago"),
        ("2025-12-29T12:00:00Z", "3d ago"),
        ("2025-11-01T12:00:00Z", "2025-11-01"),
        ("garbage", "garbage"),
    ],
)
def test_human_time(published, expected):
    now = datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
    assert cli.human_time(published, now=now) == expected


def test_search_lists_stock_mentions(fake_engine):
    fake_engine.responses[1] = [make_article(1, title="Apple and NVDA rally")]

    result = runner.invoke(cli.app, ["search", "markets", "--stocks", "--api-key", "k"])

    assert result.exit_code == 0, result.output
    assert "Mentioned: AAPL (stock), NVDA (stock)" in result.output
