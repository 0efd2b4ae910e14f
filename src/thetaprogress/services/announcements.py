"""Persisted FIFO of notices waiting to be shown."""

from __future__ import annotations

from typing import Optional

from ..domain.repositories.slot import SlotStore
from ..logging_config import get_logger
from ..models.announcement import Announcement
from ..models.slot import Slot

logger = get_logger(__name__)

DEFAULT_LIMIT = 10


class AnnouncementQueue:
    """Announcements are stored newest-first and consumed from the tail."""

    def __init__(self, store: SlotStore, limit: int = DEFAULT_LIMIT):
        if limit < 1:
            raise ValueError("announcement queue limit must be positive")
        self.store = store
        self.limit = limit
        self._items: list[Announcement] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Announcement]:
        """Pending announcements, newest first."""
        return list(self._items)

    def load(self) -> list[Announcement]:
        data = self.store.load_json(Slot.ANNOUNCEMENTS)
        items: list[Announcement] = []
        if data is not None:
            try:
                items = [Announcement.from_record(item) for item in data]
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(f"Stored announcements unreadable, starting empty: {exc}")
                items = []
        self._items = items[: self.limit]
        return self.items

    def push(self, announcement: Announcement) -> None:
        self._items = [announcement, *self._items][: self.limit]
        self._persist()

    def peek_first(self) -> Optional[Announcement]:
        """Return the oldest pending announcement, the next one to show."""
        return self._items[-1] if self._items else None

    def shift(self) -> Optional[Announcement]:
        """Remove and return the oldest pending announcement."""
        if not self._items:
            return None
        oldest = self._items.pop()
        self._persist()
        return oldest

    def _persist(self) -> bool:
        saved = self.store.save_json(Slot.ANNOUNCEMENTS, [a.to_record() for a in self._items])
        if not saved:
            logger.warning("Announcements kept in memory only; durable write failed")
        return saved


__all__ = ["AnnouncementQueue", "DEFAULT_LIMIT"]
