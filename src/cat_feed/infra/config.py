from __future__ import annotations

import os

DEFAULT_CAT_API_BASE_URL = "https://api.thecatapi.com/v1/"
DEFAULT_DATABASE_URL = "sqlite:///./cat_feed.db"
DEFAULT_TIMEOUT_SECONDS = 30.0


def cat_api_base_url() -> str:
    url = os.getenv("CAT_API_BASE_URL") or DEFAULT_CAT_API_BASE_URL

    # httpx joins relative paths onto the base URL only when it ends with "/"
    if not url.endswith("/"):
        url += "/"

    return url


def cat_api_key() -> str | None:
    return os.getenv("CAT_API_KEY") or None


def cat_api_timeout() -> float:
    raw = os.getenv("CAT_API_TIMEOUT_SECONDS")

    if not raw:
        return DEFAULT_TIMEOUT_SECONDS

    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"CAT_API_TIMEOUT_SECONDS must be a number, got {raw!r}")


def database_url() -> str:
    return os.getenv("CAT_FEED_DATABASE_URL") or DEFAULT_DATABASE_URL


def log_level() -> str:
    return (os.getenv("CAT_FEED_LOG_LEVEL") or "INFO").upper()
