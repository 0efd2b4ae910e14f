"""Pytest configuration and shared fixtures for progress engine tests.

Fixtures build isolated SQLite databases, a controllable clock and a fully
wired progress context, so tests never touch the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from thetaprogress.config import BaseConfig
from thetaprogress.context import create_progress_context
from thetaprogress.infra.database import create_session_factory
from thetaprogress.infra.repositories import SQLModelSlotRepository
from thetaprogress.models import StoredSlot  # noqa: F401  (registers the table)

# Midday in London, well away from any day boundary.
START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the tests move forward by hand."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 1, **kwargs) -> datetime:
        self.now = self.now + timedelta(days=days, **kwargs)
        return self.now


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application builds."""
    return create_session_factory(db_engine)


@pytest.fixture
def slot_repo(session_factory) -> SQLModelSlotRepository:
    return SQLModelSlotRepository(session_factory)


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Configuration pointed at a per-test data directory."""

    monkeypatch.setenv("THETA_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("THETA_DATABASE_URL", raising=False)
    monkeypatch.delenv("THETA_MILESTONES", raising=False)
    monkeypatch.delenv("THETA_TIMEZONE", raising=False)
    monkeypatch.setenv("THETA_DEV_MODE", "0")
    return BaseConfig()


@pytest.fixture
def dev_config(config) -> BaseConfig:
    config.DEV_MODE = True
    return config


@pytest.fixture
def context_factory(clock):
    """Build a progress context over a given config with seed 42 and the fake clock."""

    def _create(cfg: BaseConfig, seed: int = 42):
        return create_progress_context(cfg, clock=clock, seed_factory=lambda: seed)

    return _create


@pytest.fixture
def progress_context(config, context_factory):
    return context_factory(config)


@pytest.fixture
def dev_context(dev_config, context_factory):
    return context_factory(dev_config)
