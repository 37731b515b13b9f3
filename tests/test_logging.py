"""Tests for logging setup, JSONL formatting and secret redaction."""

import json
import logging

import pytest

from news_engine.config import LoggingConfig
from news_engine.logging_utils import JsonlFormatter, log_event, redact_secrets, setup_logging


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("news_engine")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_redact_secrets_masks_api_key_params():
    text = "GET https://newsapi.org/v2/everything?q=x&apiKey=abc123&page=2 api_key=zzz"
    redacted = redact_secrets(text)
    assert "abc123" not in redacted
    assert "zzz" not in redacted
    assert "apiKey=[REDACTED]&page=2" in redacted


def test_jsonl_formatter_includes_extras_and_redacts():
    record = logging.LogRecord(
        "news_engine.fetcher", logging.WARNING, __file__, 1, "failed url ?apiKey=secret", None, None
    )
    record.event = "provider_failed"
    record.provider = "newsapi"

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "news_engine.fetcher"
    assert payload["event"] == "provider_failed"
    assert payload["provider"] == "newsapi"
    assert "secret" not in payload["message"]
    assert "msg" not in payload


def test_setup_logging_writes_jsonl_file(tmp_path, restore_package_logger):
    cfg = LoggingConfig(level="INFO", console=False, file=True, filename="events.jsonl")

    logger = setup_logging(cfg, log_dir=tmp_path)
    log_event(logging.getLogger("news_engine.engine"), "Cache hit", event="cache_hit", key="q:::1:18")
    log_event(logger, "too quiet", level=logging.DEBUG, event="ignored")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "events.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["event"] == "cache_hit"
    assert entry["key"] == "q:::1:18"
    assert entry["logger"] == "news_engine.engine"


def test_setup_logging_console_only(restore_package_logger):
    logger = setup_logging(LoggingConfig(level="warning"))
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_log_event_without_logger_is_noop():
    log_event(None, "nothing happens", event="noop")
