"""Durable key/value slots backing every persisted state slice."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from sqlmodel import Field, SQLModel


class Slot(str, Enum):
    """Storage keys, one per independently serialized record."""

    STREAK = "streak"
    DIARY = "diary"
    ANNOUNCEMENTS = "announcements"
    COACH_ID = "coach_id"
    CLASS_ID = "class_id"
    TIMER_SECONDS = "timer_seconds"
    HAS_ONBOARDED = "has_onboarded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredSlot(SQLModel, table=True):
    """Serialized value for a single storage slot."""

    __tablename__: ClassVar[str] = "stored_slot"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
