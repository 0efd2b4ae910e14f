"""User selections kept in their own storage slots."""

from __future__ import annotations

from typing import Optional

from ..domain.repositories.slot import SlotStore
from ..logging_config import get_logger
from ..models.slot import Slot

logger = get_logger(__name__)


class Preferences:
    """Selected coach, class, timer length and onboarding flag.

    Each value is read from and written to its own slot, so one unreadable
    value never affects the others.
    """

    def __init__(self, store: SlotStore, default_timer_seconds: int = 20):
        self.store = store
        self.default_timer_seconds = default_timer_seconds

    @property
    def coach_id(self) -> Optional[str]:
        return self.store.load(Slot.COACH_ID) or None

    @property
    def class_id(self) -> Optional[str]:
        return self.store.load(Slot.CLASS_ID) or None

    @property
    def timer_seconds(self) -> int:
        raw = self.store.load(Slot.TIMER_SECONDS)
        if not raw:
            return self.default_timer_seconds
        try:
            seconds = int(raw)
        except ValueError:
            logger.warning(f"Ignoring malformed timer value {raw!r}")
            return self.default_timer_seconds
        return seconds if seconds > 0 else self.default_timer_seconds

    @property
    def has_onboarded(self) -> bool:
        return self.store.load(Slot.HAS_ONBOARDED) == "1"

    def set_coach(self, coach_id: str) -> bool:
        return self.store.save(Slot.COACH_ID, coach_id)

    def set_class(self, class_id: str) -> bool:
        return self.store.save(Slot.CLASS_ID, class_id)

    def set_timer(self, seconds: int) -> bool:
        if seconds <= 0:
            raise ValueError("timer length must be positive")
        return self.store.save(Slot.TIMER_SECONDS, str(seconds))

    def set_onboarded(self, done: bool = True) -> bool:
        return self.store.save(Slot.HAS_ONBOARDED, "1" if done else "")

    def as_dict(self) -> dict[str, object]:
        return {
            "coachId": self.coach_id,
            "classId": self.class_id,
            "timerSeconds": self.timer_seconds,
            "hasOnboarded": self.has_onboarded,
        }


__all__ = ["Preferences"]
