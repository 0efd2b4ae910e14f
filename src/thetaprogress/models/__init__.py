"""Domain records and SQLModel table exports."""

from .announcement import Announcement, AnnouncementType
from .diary import DiaryEntry, Rating
from .slot import Slot, StoredSlot
from .streak import StreakState

__all__ = [
    "Announcement",
    "AnnouncementType",
    "DiaryEntry",
    "Rating",
    "Slot",
    "StoredSlot",
    "StreakState",
]
