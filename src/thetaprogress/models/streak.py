"""Streak state persisted once per installation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


def _day_key(value: Any) -> str:
    """Return ``value`` if it is a real ``YYYY-MM-DD`` day; raise otherwise."""

    return date.fromisoformat(value).isoformat()


@dataclass
class StreakState:
    """Consecutive-day progress plus the rewards granted along the way.

    ``seed`` is fixed when the state is first created and drives reward
    selection; it survives resets.
    """

    seed: int
    current: int = 0
    best: int = 0
    last_date_key: Optional[str] = None
    unlocked: list[str] = field(default_factory=list)
    sessions_by_date: dict[str, bool] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "best": self.best,
            "lastDateKey": self.last_date_key,
            "unlocked": list(self.unlocked),
            "seed": self.seed,
            "sessionsByDate": dict(self.sessions_by_date),
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "StreakState":
        """Rebuild state from its stored form; raises on missing or mistyped fields."""

        current = int(data["current"])
        best = int(data["best"])
        if current < 0 or best < 0:
            raise ValueError("streak counters must be non-negative")
        unlocked: list[str] = []
        for reward_id in data.get("unlocked") or []:
            if reward_id not in unlocked:
                unlocked.append(str(reward_id))
        sessions = data.get("sessionsByDate") or {}
        if not isinstance(sessions, dict):
            raise TypeError("sessionsByDate must be a mapping")
        last_date_key = data.get("lastDateKey") or None
        return cls(
            seed=int(data["seed"]),
            current=current,
            best=max(best, current),
            last_date_key=_day_key(last_date_key) if last_date_key else None,
            unlocked=unlocked,
            sessions_by_date={_day_key(k): True for k, v in sessions.items() if v},
        )
