"""Streak state machine and its persisted holder."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Callable, Optional

from ..domain.repositories.slot import SlotStore
from ..logging_config import get_logger
from ..models.slot import Slot
from ..models.streak import StreakState
from .day_keys import CalendarKey, is_immediately_before

logger = get_logger(__name__)

SeedFactory = Callable[[], int]


def random_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def advance_streak(
    state: StreakState,
    today: CalendarKey,
    *,
    allow_multiple_per_day: bool = False,
) -> Optional[StreakState]:
    """Return the state after a session completed on ``today``.

    Returns None when today was already counted and repeats are not allowed.
    A missed day restarts the streak at 1 because today's session counts.
    """

    if state.last_date_key == today:
        if not allow_multiple_per_day:
            return None
        current = state.current + 1
    elif state.last_date_key and is_immediately_before(state.last_date_key, today):
        current = state.current + 1
    else:
        current = 1

    sessions = dict(state.sessions_by_date)
    sessions[today] = True
    return replace(
        state,
        current=current,
        best=max(state.best, current),
        last_date_key=today,
        unlocked=list(state.unlocked),
        sessions_by_date=sessions,
    )


class StreakTracker:
    """Holds the installation's StreakState and writes it through on change."""

    def __init__(self, store: SlotStore, seed_factory: SeedFactory = random_seed):
        self.store = store
        self.seed_factory = seed_factory
        self._state: StreakState | None = None

    @property
    def state(self) -> StreakState:
        if self._state is None:
            raise RuntimeError("StreakTracker.load() must run before use")
        return self._state

    def load(self) -> StreakState:
        """Read the stored state, creating a freshly seeded one when absent."""

        data = self.store.load_json(Slot.STREAK)
        if data is not None:
            try:
                self._state = StreakState.from_record(data)
                return self._state
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(f"Stored streak state unreadable, starting fresh: {exc}")

        self._state = StreakState(seed=self.seed_factory())
        logger.info("Created streak state", extra={"seed": self._state.seed})
        self.persist()
        return self._state

    def update(self, state: StreakState) -> None:
        self._state = state
        self.persist()

    def persist(self) -> bool:
        saved = self.store.save_json(Slot.STREAK, self.state.to_record())
        if not saved:
            logger.warning("Streak state kept in memory only; durable write failed")
        return saved


__all__ = ["StreakTracker", "advance_streak", "random_seed"]
