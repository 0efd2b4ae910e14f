"""Developer-only state mutators.

Only constructed when the app runs in dev mode; production code paths hold a
:class:`~thetaprogress.services.progress.ProgressFacade` and never see this.
"""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from ..models.announcement import Announcement, AnnouncementType
from ..models.streak import StreakState
from .day_keys import last_n_days
from .progress import CompletionResult, ProgressState, record_completion

logger = get_logger(__name__)


class DebugController:
    def __init__(self, state: ProgressState):
        self._state = state

    def set_streak_days(self, days: int) -> StreakState:
        """Force the streak to ``days`` consecutive days ending today, backfilling history.

        Zero also forgets the last counted day, so a real session today starts
        a new streak at 1.
        """

        if days < 0:
            raise ValueError("streak length cannot be negative")
        current = self._state.streaks.state
        sessions = dict(current.sessions_by_date)
        if days:
            for key in last_n_days(self._state.today(), days):
                sessions[key] = True
        updated = StreakState(
            seed=current.seed,
            current=days,
            best=max(current.best, days),
            last_date_key=self._state.today() if days else None,
            unlocked=list(current.unlocked),
            sessions_by_date=sessions,
        )
        self._state.streaks.update(updated)
        logger.info(f"Debug: streak forced to {days}", extra={"best": updated.best})
        return updated

    def reset_streak(self) -> StreakState:
        """Zero all streak progress, keeping the installation seed."""

        fresh = StreakState(seed=self._state.streaks.state.seed)
        self._state.streaks.update(fresh)
        logger.info("Debug: streak reset", extra={"seed": fresh.seed})
        return fresh

    def enqueue_announcement(
        self,
        kind: AnnouncementType | str,
        streak: Optional[int] = None,
        *,
        reward_id: Optional[str] = None,
        coach_id: Optional[str] = None,
    ) -> Announcement:
        """Queue a synthetic announcement of any type."""

        kind = AnnouncementType(kind)
        if streak is None:
            streak = self._state.streaks.state.current
        announcement = Announcement(
            id=self._state.id_factory(),
            type=kind,
            streak=streak,
            reward_id=reward_id if kind is AnnouncementType.REWARD_UNLOCKED else None,
            coach_id=coach_id if kind is AnnouncementType.COACH_UNLOCKED else None,
        )
        self._state.announcements.push(announcement)
        logger.info(f"Debug: queued {kind.value} announcement", extra={"announcement_id": announcement.id})
        return announcement

    def replay_session(self, coach_name: str, class_name: str) -> CompletionResult:
        """Complete a session with the once-per-day guard lifted."""

        return record_completion(
            self._state, coach_name, class_name, allow_multiple_per_day=True
        )


__all__ = ["DebugController"]
