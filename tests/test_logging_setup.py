from __future__ import annotations

import io
import json
import logging

import pytest

from stampgen.services.logging import setup_logging


@pytest.fixture()
def restore_logger():
    logger = logging.getLogger("stampgen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_json_records_carry_extra_fields(restore_logger):
    buf = io.StringIO()
    setup_logging("debug", json_format=True, stream=buf)
    logging.getLogger("stampgen.build.generator").debug("generated", extra={"keys": ["build_semver"]})
    record = json.loads(buf.getvalue().splitlines()[-1])
    assert record["level"] == "DEBUG"
    assert record["logger"] == "stampgen.build.generator"
    assert record["msg"] == "generated"
    assert record["keys"] == ["build_semver"]


def test_text_records_respect_level(restore_logger):
    buf = io.StringIO()
    setup_logging("WARNING", stream=buf)
    log = logging.getLogger("stampgen.cli")
    log.info("hidden")
    log.warning("shown")
    assert buf.getvalue() == "WARNING stampgen.cli: shown\n"


def test_unknown_level_falls_back_to_warning(restore_logger):
    logger = setup_logging("chatty", stream=io.StringIO())
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
