"""stampgen command line: generate build metadata instructions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml

from stampgen.build_info import BUILD_INFO
from stampgen.services.build import (
    LocalTimeUnavailableError,
    SettingsError,
    StampError,
    TimestampKind,
    TimeZone,
    emit,
    generate,
    render,
)
from stampgen.services.logging import setup_logging
from stampgen.services.settings import Settings

app = typer.Typer(help="Generate build-time metadata instructions (date, time, timestamp, version).", no_args_is_help=True)

_log = logging.getLogger("stampgen.cli")


def _load_settings(config: Optional[Path], **overrides) -> Settings:
    try:
        return Settings.from_sources(config).with_overrides(**overrides)
    except SettingsError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(2)


@app.command("emit", help="Generate the build instructions and print them (or write them to --output).")
def cmd_emit(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./stampgen.yaml)"),
    enabled: Optional[bool] = typer.Option(None, "--enabled/--disabled", help="Master switch for the build instructions"),
    timestamp: Optional[bool] = typer.Option(None, "--timestamp/--no-timestamp", help="Emit date/time instructions"),
    timezone: Optional[TimeZone] = typer.Option(None, "--timezone", "-z", case_sensitive=False, help="Clock to sample"),
    kind: Optional[TimestampKind] = typer.Option(None, "--kind", "-k", case_sensitive=False, help="Which date/time instructions to emit"),
    semver: Optional[bool] = typer.Option(None, "--semver/--no-semver", help="Emit the package version instruction"),
    version_env: Optional[str] = typer.Option(None, "--version-env", help="Environment variable holding the package version"),
    source_date_epoch: Optional[bool] = typer.Option(
        None, "--source-date-epoch/--no-source-date-epoch", help="Take the timestamp from SOURCE_DATE_EPOCH when set"
    ),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: directive, env or json"),
    directive: Optional[str] = typer.Option(None, "--directive", help="Directive prefix for the 'directive' format"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write instructions to this file instead of stdout"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level for stderr diagnostics"),
    log_json: bool = typer.Option(False, "--log-json", help="Emit diagnostics as JSON lines"),
):
    settings = _load_settings(
        config,
        enabled=enabled,
        timestamp=timestamp,
        timezone=timezone,
        kind=kind,
        semver=semver,
        version_env=version_env,
        source_date_epoch=source_date_epoch,
        format=fmt,
        directive=directive,
        log_level=log_level,
    )
    setup_logging(settings.log_level, json_format=log_json)
    _log.debug("settings resolved", extra={"source": str(settings.source) if settings.source else None})

    try:
        cfg_map = generate(settings.instructions())
    except LocalTimeUnavailableError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1)
    except SettingsError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(2)

    try:
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            with output.open("w", encoding="utf-8") as fh:
                count = emit(cfg_map, fh, settings.format, directive=settings.directive)
            _log.info("wrote %d instruction(s) to %s", count, output)
            return
        for line in render(cfg_map, settings.format, directive=settings.directive):
            typer.echo(line)
    except OSError as exc:
        typer.echo(f"error: cannot write instructions to {output}: {exc}", err=True)
        raise typer.Exit(1)
    except StampError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1)


@app.command("config", help="Show the effective settings as YAML.")
def cmd_config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./stampgen.yaml)"),
):
    settings = _load_settings(config)
    typer.echo(yaml.safe_dump(settings.to_dict(), sort_keys=False, allow_unicode=True).rstrip())


@app.command("version", help="Show the stampgen version.")
def cmd_version():
    typer.echo(f"stampgen {BUILD_INFO.version} (built {BUILD_INFO.build_date})")


def run() -> None:
    app()
