"""Configuration model for the ``STAMPGEN_BUILD_*`` instructions.

The following instructions can be generated:

==============================================================  =======
Instruction                                                     Default
==============================================================  =======
``STAMPGEN_BUILD_DATE=2021-02-12``
``STAMPGEN_BUILD_TIME=11-22-34``
``STAMPGEN_BUILD_TIMESTAMP=2021-02-12T01:54:15.134750+00:00``   yes
``STAMPGEN_BUILD_SEMVER=4.2.0``                                 yes
==============================================================  =======

If ``timestamp`` is false no date/time instruction is generated, and if
``semver`` is false the version instruction is skipped.  Date/time values
use UTC unless ``timezone`` is switched to :attr:`TimeZone.LOCAL`; which of
the three date/time instructions appear is decided by ``kind``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stampgen.config.const import DEFAULT_VERSION_ENV

from .enums import TimestampKind, TimeZone

__all__ = ["BuildConfig", "Instructions"]


@dataclass(slots=True)
class BuildConfig:
    # master switch for the whole build category
    enabled: bool = True
    # BUILD_DATE, BUILD_TIME and BUILD_TIMESTAMP
    timestamp: bool = True
    timezone: TimeZone = TimeZone.UTC
    kind: TimestampKind = TimestampKind.TIMESTAMP
    # BUILD_SEMVER
    semver: bool = True

    def has_enabled(self) -> bool:
        return self.enabled and (self.timestamp or self.semver)

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "timestamp": self.timestamp,
            "timezone": self.timezone.value,
            "kind": self.kind.value,
            "semver": self.semver,
        }


@dataclass(slots=True)
class Instructions:
    """Everything the generator needs for one run."""

    build: BuildConfig = field(default_factory=BuildConfig)
    version_env: str = DEFAULT_VERSION_ENV
    source_date_epoch: bool = False

    @classmethod
    def default(cls) -> "Instructions":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "build": self.build.to_dict(),
            "version_env": self.version_env,
            "source_date_epoch": self.source_date_epoch,
        }
