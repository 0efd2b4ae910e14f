"""Diary records for completed sessions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Rating(str, Enum):
    """Labels a user can give a night's session. Unrated entries store ``None``."""

    GOOD = "Good"
    OK = "OK"
    POOR = "Poor"


@dataclass
class DiaryEntry:
    """One day's completed session."""

    id: str
    date_key: str
    coach_name: str
    class_name: str
    created_at: str
    rating: Optional[Rating] = None

    @property
    def is_rated(self) -> bool:
        return self.rating is not None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "dateKey": self.date_key,
            "coachName": self.coach_name,
            "className": self.class_name,
            "rating": self.rating.value if self.rating else None,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "DiaryEntry":
        rating = data.get("rating")
        return cls(
            id=str(data["id"]),
            date_key=str(data["dateKey"]),
            coach_name=str(data.get("coachName") or ""),
            class_name=str(data.get("className") or ""),
            created_at=str(data["createdAt"]),
            rating=Rating(rating) if rating else None,
        )
