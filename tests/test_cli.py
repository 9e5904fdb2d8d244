from __future__ import annotations

import json
from datetime import datetime

import pytest
import yaml
from typer.testing import CliRunner

from stampgen.apps.cli.main import app
from stampgen.services.build import LocalTimeUnavailableError
from stampgen.services.build import clock as clock_module

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("STAMPGEN_CONFIG", "STAMPGEN_FORMAT", "STAMPGEN_TIMEZONE", "STAMPGEN_TIMESTAMP_KIND", "SOURCE_DATE_EPOCH"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line]


def test_emit_defaults():
    result = runner.invoke(app, ["emit"], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 0, result.output
    lines = _lines(result.output)
    assert len(lines) == 2
    prefix = "cargo:rustc-env=STAMPGEN_BUILD_TIMESTAMP="
    assert lines[0].startswith(prefix)
    datetime.fromisoformat(lines[0][len(prefix):])
    assert lines[1] == "cargo:rustc-env=STAMPGEN_BUILD_SEMVER=4.2.0"


def test_emit_all_env_format_from_epoch():
    result = runner.invoke(
        app,
        ["emit", "--kind", "all", "--no-semver", "--format", "env", "--source-date-epoch"],
        env={"SOURCE_DATE_EPOCH": "1613094855"},
    )
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == [
        "STAMPGEN_BUILD_DATE=2021-02-12",
        "STAMPGEN_BUILD_TIME=01-54-15",
        "STAMPGEN_BUILD_TIMESTAMP=2021-02-12T01:54:15+00:00",
    ]


def test_emit_disabled_prints_nothing():
    result = runner.invoke(app, ["emit", "--disabled"], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 0
    assert _lines(result.output) == []


def test_emit_version_only_json():
    result = runner.invoke(app, ["emit", "--no-timestamp", "-f", "json"], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"STAMPGEN_BUILD_SEMVER": "4.2.0"}


def test_emit_to_file(isolated_cwd):
    target = isolated_cwd / "out" / "build.env"
    result = runner.invoke(
        app,
        ["emit", "--format", "env", "--output", str(target), "--version-env", "APP_VERSION"],
        env={"APP_VERSION": "0.9.1"},
    )
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == []
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("STAMPGEN_BUILD_TIMESTAMP=")
    assert lines[1] == "STAMPGEN_BUILD_SEMVER=0.9.1"


def test_emit_reads_settings_file(isolated_cwd):
    (isolated_cwd / "stampgen.yaml").write_text(
        "build:\n  kind: date_only\n  semver: false\noutput:\n  directive: build:env\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["emit"])
    assert result.exit_code == 0, result.output
    (line,) = _lines(result.output)
    assert line.startswith("build:env=STAMPGEN_BUILD_DATE=")
    assert len(line.rsplit("=", 1)[1]) == 10


def test_local_time_failure_aborts(monkeypatch):
    def _unavailable(instant):
        raise LocalTimeUnavailableError("no tz data")

    monkeypatch.setattr(clock_module, "to_local", _unavailable)
    result = runner.invoke(app, ["emit", "--timezone", "local", "--kind", "all"], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 1
    assert "unable to determine local time" in result.output
    assert "STAMPGEN_BUILD" not in result.output


def test_local_time_emits_with_offset():
    result = runner.invoke(app, ["emit", "--timezone", "LOCAL", "--no-semver", "-f", "env"])
    assert result.exit_code == 0, result.output
    (line,) = _lines(result.output)
    stamp = datetime.fromisoformat(line.split("=", 1)[1])
    assert stamp.utcoffset() is not None


def test_bad_format_is_a_settings_error():
    result = runner.invoke(app, ["emit", "--format", "xml"])
    assert result.exit_code == 2
    assert "unknown output format" in result.output


def test_bad_settings_file(isolated_cwd):
    (isolated_cwd / "stampgen.yaml").write_text("build:\n  timezone: mars\n", encoding="utf-8")
    result = runner.invoke(app, ["emit"])
    assert result.exit_code == 2
    assert "error:" in result.output


def test_bad_source_date_epoch():
    result = runner.invoke(app, ["emit", "--source-date-epoch"], env={"SOURCE_DATE_EPOCH": "yesterday"})
    assert result.exit_code == 2
    assert "SOURCE_DATE_EPOCH" in result.output


def test_config_shows_effective_settings(isolated_cwd):
    (isolated_cwd / "stampgen.yaml").write_text("build:\n  kind: all\n", encoding="utf-8")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.output)
    assert data["build"]["kind"] == "all"
    assert data["build"]["timezone"] == "utc"
    assert data["source"].endswith("stampgen.yaml")


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("stampgen ")


def test_emit_to_directory_reports_error(isolated_cwd):
    result = runner.invoke(app, ["emit", "--output", str(isolated_cwd)], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 1
    assert "error: cannot write instructions" in result.output
    assert not isinstance(result.exception, OSError)


def test_empty_settings_section_is_accepted(isolated_cwd):
    (isolated_cwd / "stampgen.yaml").write_text("build:\n  # kind: all\n", encoding="utf-8")
    result = runner.invoke(app, ["emit", "-f", "env"], env={"STAMPGEN_PKG_VERSION": "4.2.0"})
    assert result.exit_code == 0, result.output
    lines = _lines(result.output)
    assert lines[0].startswith("STAMPGEN_BUILD_TIMESTAMP=")
    assert lines[1] == "STAMPGEN_BUILD_SEMVER=4.2.0"
