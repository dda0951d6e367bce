"""Logging setup for the gateway process.

Stdout is reserved for JSON-RPC frames, so the only handler ever installed
writes to stderr: a :class:`rich.logging.RichHandler` for people, or one JSON
object per line for log collectors.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "atlassian_mcp"

_LEVEL_ALIASES = {"trace": logging.DEBUG, "warn": logging.WARNING}

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "target": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: str = "warning", *, json_logs: bool = False) -> logging.Handler:
    """Route ``atlassian_mcp`` logs to stderr at *level*.

    Calling it again replaces the previously installed handler.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler: logging.Handler
    if json_logs:
        handler = logging.StreamHandler()  # defaults to stderr
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(_LEVEL_ALIASES.get(level.lower(), level.upper()))
    logger.propagate = False
    return handler
