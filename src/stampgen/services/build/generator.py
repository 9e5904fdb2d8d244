"""Turn a build configuration and one timestamp snapshot into instruction entries."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional, Tuple

from stampgen.config.const import SOURCE_DATE_EPOCH_ENV

from .clock import Clock, SystemClock, snapshot_from_epoch
from .config import BuildConfig, Instructions
from .enums import InstructionKey, TimestampKind
from .errors import DuplicateEntryError
from .formatting import format_date, format_time, format_timestamp

__all__ = ["InstructionMap", "add_entry", "configure_build", "generate"]

_log = logging.getLogger("stampgen.build.generator")

InstructionMap = Dict[InstructionKey, str]

_Formatter = Tuple[InstructionKey, Callable[[datetime], Optional[str]]]

_DATE: _Formatter = (InstructionKey.BUILD_DATE, format_date)
_TIME: _Formatter = (InstructionKey.BUILD_TIME, format_time)
_TIMESTAMP: _Formatter = (InstructionKey.BUILD_TIMESTAMP, format_timestamp)

_DISPATCH: dict[TimestampKind, tuple[_Formatter, ...]] = {
    TimestampKind.DATE_ONLY: (_DATE,),
    TimestampKind.TIME_ONLY: (_TIME,),
    TimestampKind.DATE_AND_TIME: (_DATE, _TIME),
    TimestampKind.TIMESTAMP: (_TIMESTAMP,),
    TimestampKind.ALL: (_DATE, _TIME, _TIMESTAMP),
}


def add_entry(cfg_map: InstructionMap, key: InstructionKey, value: str | None) -> None:
    """Insert ``value`` under ``key``; ``None`` means the entry is omitted."""
    if value is None:
        _log.debug("omitting %s: no value", key)
        return
    if key in cfg_map:
        raise DuplicateEntryError(key)
    cfg_map[key] = value


def _resolve_clock(instructions: Instructions, clock: Clock | None, environ: Mapping[str, str]) -> Clock:
    if clock is not None:
        return clock
    if instructions.source_date_epoch:
        raw = environ.get(SOURCE_DATE_EPOCH_ENV)
        if raw:
            return snapshot_from_epoch(raw)
        _log.debug("%s requested but not set; using the system clock", SOURCE_DATE_EPOCH_ENV)
    return SystemClock()


def _add_timestamp_entries(cfg_map: InstructionMap, build: BuildConfig, now: datetime) -> None:
    for key, formatter in _DISPATCH[build.kind]:
        add_entry(cfg_map, key, formatter(now))


def configure_build(
    instructions: Instructions,
    cfg_map: InstructionMap,
    *,
    clock: Clock | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Populate ``cfg_map`` with the ``BUILD_*`` entries ``instructions`` ask for.

    Raises :class:`~stampgen.services.build.errors.LocalTimeUnavailableError`
    when local timestamps are requested but the local offset is unknown;
    nothing is inserted in that case.
    """
    build = instructions.build
    if not build.has_enabled():
        _log.debug("build instructions disabled")
        return

    env = os.environ if environ is None else environ

    if build.timestamp:
        now = _resolve_clock(instructions, clock, env).capture(build.timezone)
        _add_timestamp_entries(cfg_map, build, now)

    if build.semver:
        version = env.get(instructions.version_env) or None
        if version is None:
            _log.debug("%s is not set; skipping %s", instructions.version_env, InstructionKey.BUILD_SEMVER)
        add_entry(cfg_map, InstructionKey.BUILD_SEMVER, version)


def generate(
    instructions: Instructions | None = None,
    *,
    clock: Clock | None = None,
    environ: Mapping[str, str] | None = None,
) -> InstructionMap:
    """Run the generator once against a fresh map and return it."""
    cfg_map: InstructionMap = {}
    configure_build(instructions or Instructions.default(), cfg_map, clock=clock, environ=environ)
    _log.info("generated %d build instruction(s)", len(cfg_map), extra={"keys": [k.value for k in cfg_map]})
    return cfg_map
