"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MILESTONES = (1, 3, 5, 7, 10)


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _parse_milestones(raw: str | None) -> tuple[int, ...]:
    """Parse a comma separated milestone list into a sorted, de-duplicated tuple."""

    if raw is None or not raw.strip():
        return DEFAULT_MILESTONES
    values = {int(part) for part in raw.split(",") if part.strip()}
    if any(v <= 0 for v in values):
        raise ValueError("THETA_MILESTONES must only contain positive integers.")
    return tuple(sorted(values))


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Theta"
    DB_FILENAME = "theta.db"
    ANNOUNCEMENT_LIMIT = 10
    SQLITE_PRAGMAS = {"journal_mode": "wal", "synchronous": "normal"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("THETA_DEV_MODE", default=False)
        self.TIMEZONE = os.getenv("THETA_TIMEZONE", "Europe/London")
        self.MILESTONES = _parse_milestones(os.getenv("THETA_MILESTONES"))
        self.DEFAULT_TIMER_SECONDS = _env_int("THETA_DEFAULT_TIMER_SECONDS", 20)
        self.DATABASE_URL = os.getenv("THETA_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("THETA_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration with the debug controller enabled."""

    DEBUG = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
