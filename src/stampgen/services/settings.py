"""Resolve stampgen settings from defaults, a YAML file, the environment and CLI flags.

Precedence, lowest first: built-in defaults, ``stampgen.yaml`` (or the file
named by ``STAMPGEN_CONFIG`` / an explicit path), ``STAMPGEN_*`` environment
variables, then :meth:`Settings.with_overrides`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from stampgen.config import const
from stampgen.services.build.config import BuildConfig, Instructions
from stampgen.services.build.emitter import FORMATS
from stampgen.services.build.enums import TimestampKind, TimeZone
from stampgen.services.build.errors import SettingsError

__all__ = ["Settings", "SettingsFile", "load_settings_file"]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class BuildSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: Optional[bool] = None
    timestamp: Optional[bool] = None
    timezone: Optional[TimeZone] = None
    kind: Optional[TimestampKind] = None
    semver: Optional[bool] = None

    @field_validator("timezone", mode="before")
    @classmethod
    def _timezone(cls, value: Any) -> Any:
        return None if value is None else TimeZone.parse(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _kind(cls, value: Any) -> Any:
        return None if value is None else TimestampKind.parse(value)


class OutputSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: Optional[str] = None
    directive: Optional[str] = None


class SettingsFile(BaseModel):
    """Schema of ``stampgen.yaml``."""

    model_config = ConfigDict(extra="forbid")

    build: BuildSection = BuildSection()
    version_env: Optional[str] = None
    source_date_epoch: Optional[bool] = None
    output: OutputSection = OutputSection()
    log_level: Optional[str] = None

    @field_validator("build", "output", mode="before")
    @classmethod
    def _empty_section(cls, value: Any) -> Any:
        # "build:" with every key commented out loads as None
        return {} if value is None else value


def load_settings_file(path: Path) -> SettingsFile:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"invalid YAML in {path}: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SettingsError(f"{path}: expected a mapping at the top level")
    try:
        return SettingsFile.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(p) for p in first.get("loc", ()))
        raise SettingsError(f"{path}: {location}: {first.get('msg')}") from exc


def _parse_bool(name: str, value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise SettingsError(f"{name} must be a boolean, got '{value}'")


def _parse_enum(name: str, enum_cls: Any, value: Any) -> Any:
    try:
        return enum_cls.parse(value)
    except ValueError as exc:
        raise SettingsError(f"{name}: {exc}") from exc


def _check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        choices = ", ".join(sorted(FORMATS))
        raise SettingsError(f"unknown output format '{fmt}' (expected one of: {choices})")
    return fmt


def _settings_path(path: Path | str | None, environ: Mapping[str, str]) -> Path | None:
    if path is not None:
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise SettingsError(f"settings file not found: {candidate}")
        return candidate
    explicit = environ.get(const.SETTINGS_PATH_ENV)
    if explicit:
        candidate = Path(explicit).expanduser()
        if not candidate.is_file():
            raise SettingsError(f"{const.SETTINGS_PATH_ENV} points to a missing file: {candidate}")
        return candidate
    candidate = Path.cwd() / const.SETTINGS_FILENAME
    return candidate if candidate.is_file() else None


@dataclass(frozen=True, slots=True)
class Settings:
    enabled: bool = True
    timestamp: bool = True
    timezone: TimeZone = TimeZone.UTC
    kind: TimestampKind = TimestampKind.TIMESTAMP
    semver: bool = True
    version_env: str = const.DEFAULT_VERSION_ENV
    source_date_epoch: bool = False
    format: str = const.DEFAULT_FORMAT
    directive: str = const.DEFAULT_DIRECTIVE
    log_level: str = const.DEFAULT_LOG_LEVEL
    source: Optional[Path] = None

    # --- constructors ---
    @classmethod
    def from_sources(
        cls,
        path: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()

        source = _settings_path(path, env)
        if source is not None:
            settings = settings._apply_file(load_settings_file(source), source)

        return settings._apply_env(env)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-``None`` override applied (CLI flags)."""
        values = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(values) - set(self.__dataclass_fields__)
        if unknown:
            raise TypeError(f"unknown settings: {', '.join(sorted(unknown))}")
        if "timezone" in values:
            values["timezone"] = _parse_enum("timezone", TimeZone, values["timezone"])
        if "kind" in values:
            values["kind"] = _parse_enum("kind", TimestampKind, values["kind"])
        if "format" in values:
            _check_format(values["format"])
        return replace(self, **values)

    # --- layering ---
    def _apply_file(self, data: SettingsFile, source: Path) -> "Settings":
        values: dict[str, Any] = {
            "enabled": data.build.enabled,
            "timestamp": data.build.timestamp,
            "timezone": data.build.timezone,
            "kind": data.build.kind,
            "semver": data.build.semver,
            "version_env": data.version_env,
            "source_date_epoch": data.source_date_epoch,
            "format": data.output.format,
            "directive": data.output.directive,
            "log_level": data.log_level,
        }
        if data.output.format is not None:
            try:
                _check_format(data.output.format)
            except SettingsError as exc:
                raise SettingsError(f"{source}: {exc}") from exc
        updated = replace(self, **{k: v for k, v in values.items() if v is not None})
        return replace(updated, source=source)

    def _apply_env(self, env: Mapping[str, str]) -> "Settings":
        values: dict[str, Any] = {}
        for name, field_name in (
            (const.ENV_BUILD_ENABLED, "enabled"),
            (const.ENV_BUILD_TIMESTAMP, "timestamp"),
            (const.ENV_BUILD_SEMVER, "semver"),
            (const.ENV_SOURCE_DATE_EPOCH, "source_date_epoch"),
        ):
            raw = env.get(name)
            if raw:
                values[field_name] = _parse_bool(name, raw)
        raw = env.get(const.ENV_BUILD_TIMEZONE)
        if raw:
            values["timezone"] = _parse_enum(const.ENV_BUILD_TIMEZONE, TimeZone, raw)
        raw = env.get(const.ENV_BUILD_KIND)
        if raw:
            values["kind"] = _parse_enum(const.ENV_BUILD_KIND, TimestampKind, raw)
        raw = env.get(const.ENV_FORMAT)
        if raw:
            values["format"] = _check_format(raw.strip())
        for name, field_name in (
            (const.ENV_VERSION_ENV, "version_env"),
            (const.ENV_DIRECTIVE, "directive"),
            (const.ENV_LOG_LEVEL, "log_level"),
        ):
            raw = env.get(name)
            if raw:
                values[field_name] = raw.strip()
        return replace(self, **values) if values else self

    # --- views ---
    def instructions(self) -> Instructions:
        return Instructions(
            build=BuildConfig(
                enabled=self.enabled,
                timestamp=self.timestamp,
                timezone=self.timezone,
                kind=self.kind,
                semver=self.semver,
            ),
            version_env=self.version_env,
            source_date_epoch=self.source_date_epoch,
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.instructions().to_dict()
        data["output"] = {"format": self.format, "directive": self.directive}
        data["log_level"] = self.log_level
        data["source"] = str(self.source) if self.source else None
        return data
