"""Tests covering stampgen's own version metadata and the package facade."""

from __future__ import annotations

import runpy
import sys

import pytest

import stampgen
from stampgen import build_info
from stampgen.services import build


def test_emitted_names_do_not_leak_into_own_version(monkeypatch):
    monkeypatch.delenv("STAMPGEN_SELF_VERSION", raising=False)
    monkeypatch.delenv("STAMPGEN_SELF_BUILD_DATE", raising=False)
    monkeypatch.setenv("STAMPGEN_BUILD_SEMVER", "4.2.0")
    monkeypatch.setenv("STAMPGEN_BUILD_TIMESTAMP", "user-build")

    assert build_info._compute_version() != "4.2.0"
    assert build_info._compute_build_date() != "user-build"


def test_dedicated_names_override_own_version(monkeypatch):
    monkeypatch.setenv("STAMPGEN_SELF_VERSION", "9.9.9")
    monkeypatch.setenv("STAMPGEN_SELF_BUILD_DATE", "2021-02-12T01:54:15+00:00")

    info = build_info._load_build_info()
    assert info.version == "9.9.9"
    assert info.build_date == "2021-02-12T01:54:15+00:00"


def test_facade_exposes_core_api():
    from stampgen import BuildConfig, Instructions, emit, generate

    assert generate is build.generate
    assert emit is build.emit
    assert Instructions is build.Instructions
    assert BuildConfig is build.BuildConfig


def test_facade_rejects_unknown_names():
    with pytest.raises(AttributeError):
        stampgen.configure_build  # noqa: B018


def test_module_entrypoint_runs_cli(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["stampgen", "version"])
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("stampgen", run_name="__main__")
    assert excinfo.value.code in (0, None)
    assert capsys.readouterr().out.startswith("stampgen ")
