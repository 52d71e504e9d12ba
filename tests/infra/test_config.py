"""Tests for environment-driven configuration and logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from cat_feed.infra import config
from cat_feed.infra.logging_config import JsonFormatter


# ==============================================================================
# Config
# ==============================================================================


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CAT_API_BASE_URL",
        "CAT_API_KEY",
        "CAT_API_TIMEOUT_SECONDS",
        "CAT_FEED_DATABASE_URL",
        "CAT_FEED_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    assert config.cat_api_base_url() == "https://api.thecatapi.com/v1/"
    assert config.cat_api_key() is None
    assert config.cat_api_timeout() == 30.0
    assert config.database_url() == "sqlite:///./cat_feed.db"
    assert config.log_level() == "INFO"


def test_base_url_gets_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAT_API_BASE_URL", "http://localhost:9000/v1")

    assert config.cat_api_base_url() == "http://localhost:9000/v1/"


def test_invalid_timeout_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAT_API_TIMEOUT_SECONDS", "soon")

    with pytest.raises(RuntimeError, match="CAT_API_TIMEOUT_SECONDS"):
        config.cat_api_timeout()


def test_log_level_is_upper_cased(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAT_FEED_LOG_LEVEL", "debug")

    assert config.log_level() == "DEBUG"


# ==============================================================================
# JSON logging
# ==============================================================================


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.makeLogRecord(
        {"name": "cat_feed.test", "levelname": "INFO", "msg": "Loaded cats", "fetched": 10}
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Loaded cats"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "cat_feed.test"
    assert payload["fetched"] == 10
    assert "msg" not in payload
