"""Structured logging setup.

Modules log through ``logging.getLogger(__name__)`` and pass context via
``extra={...}``. This formatter turns those extras into JSON fields.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cat_feed.infra.config import log_level

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_KEYS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per record, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_KEYS or key in payload:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging with JSON output."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or log_level(), handlers=[handler], force=True)
