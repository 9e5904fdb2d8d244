"""Formatting helpers for the date/time build instructions.

Each helper returns ``None`` instead of raising so that one unusable field
only drops its own instruction.
"""

from __future__ import annotations

import logging
from datetime import datetime

__all__ = ["format_date", "format_time", "format_timestamp"]

_log = logging.getLogger("stampgen.build.formatting")


def format_date(now: datetime) -> str | None:
    """``YYYY-MM-DD``"""
    try:
        return f"{now.year:04d}-{now.month:02d}-{now.day:02d}"
    except (AttributeError, TypeError, ValueError) as exc:
        _log.debug("date formatting failed: %s", exc)
        return None


def format_time(now: datetime) -> str | None:
    """``HH-MM-SS``, 24-hour clock with hyphen separators."""
    try:
        return f"{now.hour:02d}-{now.minute:02d}-{now.second:02d}"
    except (AttributeError, TypeError, ValueError) as exc:
        _log.debug("time formatting failed: %s", exc)
        return None


def format_timestamp(now: datetime) -> str | None:
    """RFC 3339 timestamp with a numeric offset, e.g. ``2021-02-12T01:54:15.134750+00:00``."""
    try:
        offset = now.utcoffset()
    except (AttributeError, TypeError, ValueError) as exc:
        _log.debug("timestamp formatting failed: %s", exc)
        return None
    if offset is None:
        _log.debug("timestamp formatting skipped: snapshot has no UTC offset")
        return None
    if offset.total_seconds() % 60:
        # RFC 3339 offsets carry hours and minutes only
        _log.debug("timestamp formatting skipped: sub-minute UTC offset %s", offset)
        return None
    return now.isoformat()
