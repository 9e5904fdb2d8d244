"""Enumerations describing timezones, timestamp granularity and instruction keys."""
from __future__ import annotations

from enum import Enum

__all__ = [
    "TimeZone",
    "TimestampKind",
    "InstructionKey",
]


class _StrEnum(str, Enum):
    """Simple ``str``-backed enum compatible with Python 3.10."""

    def __str__(self) -> str:  # pragma: no cover - convenience for logging only
        return str(self.value)

    @classmethod
    def parse(cls, value: "str | _StrEnum"):
        """Resolve ``value`` case-insensitively; ``-`` and ``_`` are interchangeable."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if member.value == text:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"'{value}' is not a valid {cls.__name__} (expected one of: {choices})")


class TimeZone(_StrEnum):
    UTC = "utc"
    LOCAL = "local"


class TimestampKind(_StrEnum):
    DATE_ONLY = "date_only"
    TIME_ONLY = "time_only"
    DATE_AND_TIME = "date_and_time"
    TIMESTAMP = "timestamp"
    ALL = "all"


class InstructionKey(_StrEnum):
    BUILD_DATE = "build_date"
    BUILD_TIME = "build_time"
    BUILD_TIMESTAMP = "build_timestamp"
    BUILD_SEMVER = "build_semver"

    @property
    def env_name(self) -> str:
        """Name under which the entry is exposed to the compiled artifact."""
        return f"STAMPGEN_{self.value.upper()}"
