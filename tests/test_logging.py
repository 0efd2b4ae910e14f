"""Tests for the package logging setup."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from thetaprogress.logging_config import (
    LOG_FILENAME,
    ROOT_LOGGER_NAME,
    SERVICES_LOGGER_NAME,
    JsonLineFormatter,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _detach_handlers():
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    logging.getLogger(SERVICES_LOGGER_NAME).setLevel(logging.NOTSET)


def _record(level=logging.INFO, msg="Streak advanced", exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="thetaprogress.services.streaks",
        level=level,
        pathname="streaks.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def _read_lines(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


def test_json_line_shape():
    entry = json.loads(JsonLineFormatter().format(_record()))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "thetaprogress.services.streaks"
    assert entry["msg"] == "Streak advanced"
    assert entry["ts"].endswith("+00:00")
    assert "extra" not in entry
    assert "exc" not in entry


def test_json_line_nests_extra_fields():
    record = _record()
    record.seed = 42
    record.milestones = [1, 3]

    entry = json.loads(JsonLineFormatter().format(record))

    assert entry["extra"] == {"seed": 42, "milestones": [1, 3]}


def test_json_line_includes_traceback():
    try:
        raise ValueError("day is out of range for month")
    except ValueError:
        exc_info = sys.exc_info()

    entry = json.loads(JsonLineFormatter().format(_record(logging.ERROR, "load failed", exc_info)))

    assert "ValueError: day is out of range for month" in entry["exc"]


def test_startup_record_describes_engine(config, tmp_path):
    logger = setup_logging(config)
    for handler in logger.handlers:
        handler.flush()

    entries = _read_lines(tmp_path / "logs" / LOG_FILENAME)

    assert entries[0]["msg"] == "Progress engine logging ready"
    assert entries[0]["extra"]["timezone"] == config.TIMEZONE
    assert entries[0]["extra"]["milestones"] == [1, 3, 5, 7, 10]
    assert entries[0]["extra"]["dev_mode"] is False


def test_setup_logging_replaces_handlers(config):
    setup_logging(config)
    logger = setup_logging(config)

    assert logger.name == ROOT_LOGGER_NAME
    assert len(logger.handlers) == 2
    assert sum(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers) == 1


@pytest.mark.parametrize(
    "dev_mode, services_level, console_level",
    [(True, logging.DEBUG, logging.DEBUG), (False, logging.INFO, logging.WARNING)],
)
def test_levels_follow_dev_mode(config, dev_mode, services_level, console_level):
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console = [h for h in logger.handlers if not isinstance(h, logging.handlers.RotatingFileHandler)]
    assert [h.level for h in console] == [console_level]
    assert logging.getLogger(SERVICES_LOGGER_NAME).level == services_level
    assert get_logger("thetaprogress.services.streaks").isEnabledFor(logging.DEBUG) is dev_mode


def test_service_debug_reaches_file_in_dev_mode(config, tmp_path):
    config.DEV_MODE = True
    logger = setup_logging(config)

    get_logger("thetaprogress.services.diary").debug("No diary entry abc")
    for handler in logger.handlers:
        handler.flush()

    messages = [e["msg"] for e in _read_lines(tmp_path / "logs" / LOG_FILENAME)]
    assert "No diary entry abc" in messages


def test_get_logger():
    assert get_logger("module1").name == "thetaprogress.module1"
    assert get_logger("thetaprogress.services.streaks").name == "thetaprogress.services.streaks"
