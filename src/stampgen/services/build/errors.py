"""Error classes raised while generating build instructions."""

from __future__ import annotations


class StampError(RuntimeError):
    """Base error for instruction generation."""


class LocalTimeUnavailableError(StampError):
    """Raised when local timestamps are requested but the local offset is unknown."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        message = "unable to determine local time"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DuplicateEntryError(StampError):
    """Raised when an instruction key is inserted twice into the same map."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"instruction '{key}' was already generated for this run")


class UnknownFormatError(StampError):
    """Raised when an output format name is not recognised."""

    def __init__(self, fmt: str, *, choices: list[str] | None = None) -> None:
        self.format = fmt
        self.choices = choices or []
        message = f"Unknown output format '{fmt}'"
        if self.choices:
            message += ": available: " + ", ".join(self.choices)
        super().__init__(message)


class SettingsError(StampError):
    """Raised when a settings file or environment value cannot be used."""
