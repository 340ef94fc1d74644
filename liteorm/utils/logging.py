"""
Logging setup for liteorm.

Library modules only call `get_logger`. Applications and the `liteorm` CLI
call `configure_logging` once to attach a stream handler to the root logger,
either with a one-line console format or as JSON objects.

Executed statements are logged by the connection handle with
`extra={"statement": ...}`; schema changes carry `action` and `table`. The
JSON formatter lifts such fields to top-level keys.

Usage:
    from liteorm.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.info("[SCHEMA] create_table user.user", extra={"table": "user"})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes present on every LogRecord; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update(
        (key, value) for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
    )
    # Older call sites pass a single `extra` dict attribute.
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, `extra` fields included."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def _logging_config(level: str, formatter: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": CONSOLE_DATEFMT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stream": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": level,
            }
        },
        "root": {"handlers": ["stream"], "level": level},
    }


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Attach liteorm's stream handler to the root logger.

    Parameters
    ----------
    level : str
        Level name applied to the root logger and its handler.
    json_logs : bool
        Emit JSON objects instead of console lines.
    force : bool
        If False and the root logger already has handlers, leave it untouched.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_logging_config(level.upper(), "json" if json_logs else "console"))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
