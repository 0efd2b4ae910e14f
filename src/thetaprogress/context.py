"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelSlotRepository
from .logging_config import get_logger
from .services.announcements import AnnouncementQueue
from .services.day_keys import utc_now
from .services.debug import DebugController
from .services.diary import DiaryLedger, new_id
from .services.preferences import Preferences
from .services.progress import ProgressFacade, ProgressState
from .services.rewards import RewardEngine
from .services.streaks import StreakTracker, random_seed
from .services.telemetry import LoggingTelemetrySink, TelemetrySink

logger = get_logger(__name__)


@dataclass
class ProgressContext:
    """Centralized context: storage, loaded state and the facades over it."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    slot_repo: SQLModelSlotRepository
    state: ProgressState
    progress: ProgressFacade
    preferences: Preferences

    # Only present in dev mode
    debug: Optional[DebugController] = None

    def require_debug(self) -> DebugController:
        """Return the debug controller or raise outside dev mode."""

        if self.debug is None:
            raise RuntimeError("Debug operations are only available in dev mode")
        return self.debug


def create_progress_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Callable[[], datetime] = utc_now,
    seed_factory: Callable[[], int] = random_seed,
    id_factory: Callable[[], str] = new_id,
    telemetry: Optional[TelemetrySink] = None,
) -> ProgressContext:
    """Create storage, load persisted state and wire the facades."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    slot_repo = SQLModelSlotRepository(session_factory)

    state = ProgressState(
        streaks=StreakTracker(slot_repo, seed_factory=seed_factory),
        rewards=RewardEngine(config.MILESTONES),
        diary=DiaryLedger(slot_repo, clock=clock, id_factory=id_factory),
        announcements=AnnouncementQueue(slot_repo, limit=config.ANNOUNCEMENT_LIMIT),
        zone=config.TIMEZONE,
        clock=clock,
        telemetry=telemetry or LoggingTelemetrySink(),
        id_factory=id_factory,
    ).load()

    logger.info(
        "Progress state loaded",
        extra={
            "seed": state.streaks.state.seed,
            "streak": state.streaks.state.current,
            "diary_entries": len(state.diary),
            "pending_announcements": len(state.announcements),
        },
    )

    return ProgressContext(
        config=config,
        session_factory=session_factory,
        slot_repo=slot_repo,
        state=state,
        progress=ProgressFacade(state),
        preferences=Preferences(slot_repo, default_timer_seconds=config.DEFAULT_TIMER_SECONDS),
        debug=DebugController(state) if config.DEV_MODE else None,
    )
