"""Build-time metadata instructions: configuration, generation and emission."""
from .config import BuildConfig, Instructions
from .clock import Clock, FixedClock, SystemClock
from .emitter import emit, render
from .enums import InstructionKey, TimestampKind, TimeZone
from .errors import (
    DuplicateEntryError,
    LocalTimeUnavailableError,
    SettingsError,
    StampError,
    UnknownFormatError,
)
from .generator import InstructionMap, add_entry, configure_build, generate

__all__ = [
    "BuildConfig",
    "Instructions",
    "Clock",
    "FixedClock",
    "SystemClock",
    "emit",
    "render",
    "InstructionKey",
    "TimestampKind",
    "TimeZone",
    "DuplicateEntryError",
    "LocalTimeUnavailableError",
    "SettingsError",
    "StampError",
    "UnknownFormatError",
    "InstructionMap",
    "add_entry",
    "configure_build",
    "generate",
]
