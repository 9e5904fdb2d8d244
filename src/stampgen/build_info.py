"""Utilities for exposing stampgen's own build metadata.

The project keeps a static semantic version in :mod:`pyproject.toml`.  When a
release pipeline runs stampgen on itself and exports the result in ``env``
format, it sets ``STAMPGEN_SELF_VERSION`` and ``STAMPGEN_SELF_BUILD_DATE`` from
those values so packaged builds report the canonical information.  The
emitted ``STAMPGEN_BUILD_*`` names belong to whatever project is being built
and are never read here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import metadata
import os
from typing import Final

from stampgen.config.const import ENV_SELF_BUILD_DATE, ENV_SELF_VERSION
from stampgen.services.build.formatting import format_timestamp


_BASE_VERSION: Final[str] = os.getenv("STAMPGEN_BASE_VERSION", "0.1.0")


def _compute_version() -> str:
    explicit = os.getenv(ENV_SELF_VERSION)
    if explicit:
        return explicit

    try:
        return metadata.version("stampgen")
    except metadata.PackageNotFoundError:
        return _BASE_VERSION


def _compute_build_date() -> str:
    explicit = os.getenv(ENV_SELF_BUILD_DATE)
    if explicit:
        return explicit

    return format_timestamp(datetime.now(tz=timezone.utc)) or "unknown"


@dataclass(frozen=True, slots=True)
class BuildInfo:
    version: str
    build_date: str


def _load_build_info() -> BuildInfo:
    return BuildInfo(version=_compute_version(), build_date=_compute_build_date())


BUILD_INFO: Final[BuildInfo] = _load_build_info()
