"""Timestamp snapshot capture for the build instructions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Protocol

from .enums import TimeZone
from .errors import LocalTimeUnavailableError, SettingsError

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "to_local",
    "snapshot_from_epoch",
]

_log = logging.getLogger("stampgen.build.clock")


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Clock(Protocol):
    def capture(self, tz: TimeZone) -> datetime: ...


def to_local(instant: datetime) -> datetime:
    """Convert an aware ``instant`` to local civil time with a resolved offset."""
    try:
        local = instant.astimezone()
    except (OSError, OverflowError, ValueError) as exc:
        raise LocalTimeUnavailableError(str(exc)) from exc
    if local.utcoffset() is None:
        raise LocalTimeUnavailableError("local UTC offset is not available")
    return local


def _convert(instant: datetime, tz: TimeZone) -> datetime:
    if tz is TimeZone.LOCAL:
        return to_local(instant)
    return instant.astimezone(timezone.utc)


@dataclass(slots=True)
class SystemClock:
    """Samples the system wall clock."""

    now: Callable[[], datetime] = field(default=_utcnow)

    def capture(self, tz: TimeZone) -> datetime:
        snapshot = _convert(self.now(), tz)
        _log.debug("captured %s snapshot %s", tz, snapshot.isoformat())
        return snapshot


@dataclass(slots=True)
class FixedClock:
    """Always returns the same instant; used for reproducible builds and tests."""

    instant: datetime

    def capture(self, tz: TimeZone) -> datetime:
        if self.instant.tzinfo is None:
            # naive instants are taken to be UTC
            base = self.instant.replace(tzinfo=timezone.utc)
        else:
            base = self.instant
        return _convert(base, tz)


def snapshot_from_epoch(value: str) -> FixedClock:
    """Build a :class:`FixedClock` from a ``SOURCE_DATE_EPOCH`` value."""
    try:
        seconds = int(value.strip())
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"SOURCE_DATE_EPOCH must be an integer, got '{value}'") from exc
    try:
        instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OSError, OverflowError, ValueError) as exc:
        raise SettingsError(f"SOURCE_DATE_EPOCH is out of range: {seconds}") from exc
    return FixedClock(instant)
