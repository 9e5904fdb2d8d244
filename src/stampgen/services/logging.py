"""Logging setup for the stampgen command line.

Instructions go to stdout, so every log record is written to stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Optional

from stampgen.config.const import DEFAULT_LOG_LEVEL

__all__ = ["setup_logging", "JsonFormatter"]

_ROOT_LOGGER = "stampgen"

# attributes present on every LogRecord; anything else came in through ``extra=``
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _json_payload(record: logging.LogRecord) -> str:
    base = {
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    timestamp = getattr(record, "asctime", None)
    if timestamp:
        base["time"] = timestamp
    for key, value in vars(record).items():
        if key not in _RESERVED and not key.startswith("_"):
            base[key] = value
    if record.exc_info:
        base["exc"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(base, ensure_ascii=False, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        return _json_payload(record)


def setup_logging(
    level: Optional[str] = None,
    *,
    json_format: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a single stderr handler to the ``stampgen`` logger."""

    resolved_level = (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, resolved_level, logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
