"""Queued one-shot notices shown on the next app open."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class AnnouncementType(str, Enum):
    STREAK_PLUS = "streak_plus"
    REWARD_UNLOCKED = "reward_unlocked"
    COACH_UNLOCKED = "coach_unlocked"


@dataclass(frozen=True)
class Announcement:
    """Tagged notice; ``reward_id`` and ``coach_id`` are set only for their variants."""

    id: str
    type: AnnouncementType
    streak: int
    reward_id: Optional[str] = None
    coach_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type is AnnouncementType.REWARD_UNLOCKED and not self.reward_id:
            raise ValueError("reward_unlocked announcements need a reward_id")
        if self.type is AnnouncementType.COACH_UNLOCKED and not self.coach_id:
            raise ValueError("coach_unlocked announcements need a coach_id")

    @classmethod
    def streak_plus(cls, announcement_id: str, streak: int) -> "Announcement":
        return cls(id=announcement_id, type=AnnouncementType.STREAK_PLUS, streak=streak)

    @classmethod
    def reward_unlocked(cls, announcement_id: str, streak: int, reward_id: str) -> "Announcement":
        return cls(
            id=announcement_id,
            type=AnnouncementType.REWARD_UNLOCKED,
            streak=streak,
            reward_id=reward_id,
        )

    @classmethod
    def coach_unlocked(cls, announcement_id: str, streak: int, coach_id: str) -> "Announcement":
        return cls(
            id=announcement_id,
            type=AnnouncementType.COACH_UNLOCKED,
            streak=streak,
            coach_id=coach_id,
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"id": self.id, "type": self.type.value, "streak": self.streak}
        if self.type is AnnouncementType.REWARD_UNLOCKED:
            record["rewardId"] = self.reward_id
        elif self.type is AnnouncementType.COACH_UNLOCKED:
            record["coachId"] = self.coach_id
        return record

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Announcement":
        kind = AnnouncementType(data["type"])
        return cls(
            id=str(data["id"]),
            type=kind,
            streak=int(data["streak"]),
            reward_id=data.get("rewardId") if kind is AnnouncementType.REWARD_UNLOCKED else None,
            coach_id=data.get("coachId") if kind is AnnouncementType.COACH_UNLOCKED else None,
        )
