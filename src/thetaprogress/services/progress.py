"""Progress facade: the one entry point the app uses for streak, diary and announcements.

State lives in an explicitly constructed :class:`ProgressState` that is
loaded once at startup and shared by the facade and, in dev mode, the debug
controller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Callable, Optional

from ..logging_config import get_logger
from ..models.announcement import Announcement
from ..models.diary import DiaryEntry, Rating
from .announcements import AnnouncementQueue
from .day_keys import CalendarKey, last_n_days, resolve_zone, today_key, utc_now
from .diary import DiaryLedger, new_id
from .rewards import RewardEngine
from .streaks import StreakTracker, advance_streak
from .telemetry import TelemetrySink, emit

logger = get_logger(__name__)


@dataclass
class ProgressState:
    """Everything the facade reads and mutates, wired together at startup."""

    streaks: StreakTracker
    rewards: RewardEngine
    diary: DiaryLedger
    announcements: AnnouncementQueue
    zone: tzinfo | str = "Europe/London"
    clock: Callable[[], datetime] = utc_now
    telemetry: Optional[TelemetrySink] = None
    id_factory: Callable[[], str] = field(default=new_id)

    def __post_init__(self) -> None:
        self.zone = resolve_zone(self.zone)

    def load(self) -> "ProgressState":
        self.streaks.load()
        self.diary.load()
        self.announcements.load()
        return self

    def today(self) -> CalendarKey:
        return today_key(self.clock(), self.zone)


@dataclass(frozen=True)
class CompletionResult:
    reward_id: Optional[str] = None
    applied: bool = False


@dataclass(frozen=True)
class DayStatus:
    date_key: CalendarKey
    done: bool


@dataclass(frozen=True)
class PublicState:
    current: int
    best: int
    next_milestone: Optional[int]
    days_to_next: Optional[int]
    next_reward_preview_id: Optional[str]
    last_7_days: list[DayStatus]

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "best": self.best,
            "nextMilestone": self.next_milestone,
            "daysToNext": self.days_to_next,
            "nextRewardPreviewId": self.next_reward_preview_id,
            "last7Days": [{"dateKey": d.date_key, "done": d.done} for d in self.last_7_days],
        }


def record_completion(
    state: ProgressState,
    coach_name: str,
    class_name: str,
    *,
    allow_multiple_per_day: bool = False,
) -> CompletionResult:
    """Apply one completed session to streak, rewards, announcements and diary."""

    if not coach_name or not class_name:
        logger.warning("Session completion ignored: coach or class missing")
        return CompletionResult()

    today = state.today()
    previous = state.streaks.state
    advanced = advance_streak(previous, today, allow_multiple_per_day=allow_multiple_per_day)

    reward_id: Optional[str] = None
    if advanced is None:
        logger.info(f"Session already counted for {today}")
    else:
        reward_id = state.rewards.evaluate(advanced.current, advanced.seed, advanced.unlocked)
        if reward_id:
            advanced.unlocked.append(reward_id)
        state.streaks.update(advanced)

        if reward_id:
            state.announcements.push(
                Announcement.reward_unlocked(state.id_factory(), advanced.current, reward_id)
            )
        else:
            state.announcements.push(Announcement.streak_plus(state.id_factory(), advanced.current))

        logger.info(
            f"Streak {previous.current} -> {advanced.current} on {today}",
            extra={"best": advanced.best, "reward_id": reward_id},
        )

    if state.diary.entry_for(today) is None:
        state.diary.append(today, coach_name, class_name)

    if advanced is not None:
        emit(
            state.telemetry,
            "session_complete",
            date_key=today,
            streak=advanced.current,
            reward_id=reward_id,
        )
    return CompletionResult(reward_id=reward_id, applied=advanced is not None)


def build_public_state(state: ProgressState) -> PublicState:
    streak = state.streaks.state
    today = state.today()
    next_milestone = state.rewards.next_milestone(streak.current)
    return PublicState(
        current=streak.current,
        best=streak.best,
        next_milestone=next_milestone,
        days_to_next=next_milestone - streak.current if next_milestone is not None else None,
        next_reward_preview_id=state.rewards.preview(streak.current, streak.seed, streak.unlocked),
        last_7_days=[
            DayStatus(date_key=key, done=bool(streak.sessions_by_date.get(key)))
            for key in last_n_days(today, 7)
        ],
    )


class ProgressFacade:
    """Production operations exposed to the presentation layer."""

    def __init__(self, state: ProgressState):
        self._state = state

    def complete_session(self, coach_name: str, class_name: str) -> CompletionResult:
        return record_completion(self._state, coach_name, class_name)

    def get_public_state(self) -> PublicState:
        return build_public_state(self._state)

    def list_diary_entries(self) -> list[DiaryEntry]:
        return self._state.diary.entries

    def rate_diary_entry(self, entry_id: str, rating: Rating | str) -> Optional[DiaryEntry]:
        return self._state.diary.rate(entry_id, rating)

    def peek_announcement(self) -> Optional[Announcement]:
        return self._state.announcements.peek_first()

    def dismiss_announcement(self) -> Optional[Announcement]:
        return self._state.announcements.shift()


__all__ = [
    "CompletionResult",
    "DayStatus",
    "ProgressFacade",
    "ProgressState",
    "PublicState",
    "build_public_state",
    "record_completion",
]
