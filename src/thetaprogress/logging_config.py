"""Logging for the progress engine.

Everything goes under the ``thetaprogress`` logger. The log file gets one JSON
object per line so completion and telemetry records can be grepped by field;
the console gets plain text and stays quiet unless dev mode is on.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

ROOT_LOGGER_NAME = "thetaprogress"
SERVICES_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.services"
LOG_FILENAME = "progress.log"

# Anything on a record that the logging module set itself; the rest came from ``extra``.
_BUILTIN_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON line, nesting ``extra`` fields under ``"extra"``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extra = {k: v for k, v in vars(record).items() if k not in _BUILTIN_FIELDS}
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if dev_mode:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", "%H:%M:%S"))
    else:
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and rotating JSON file handlers to the package logger.

    Safe to call again; previous handlers are closed and replaced. In dev mode
    the services loggers drop to DEBUG so every streak transition is visible.
    """

    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / LOG_FILENAME

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.INFO)
    logging.getLogger(SERVICES_LOGGER_NAME).setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(JsonLineFormatter())
    root.addHandler(_console_handler(config.DEV_MODE))
    root.addHandler(file_handler)

    root.info(
        "Progress engine logging ready",
        extra={
            "timezone": config.TIMEZONE,
            "milestones": list(config.MILESTONES),
            "dev_mode": config.DEV_MODE,
            "database": config.DATABASE_URL,
        },
    )
    return root


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` as a child of the package logger (unchanged if it already is one)."""

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
