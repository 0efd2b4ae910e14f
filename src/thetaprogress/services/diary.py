"""Diary ledger of completed sessions, newest date first."""

from __future__ import annotations

import uuid
from collections import Counter
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..domain.repositories.slot import SlotStore
from ..logging_config import get_logger
from ..models.diary import DiaryEntry, Rating
from ..models.slot import Slot
from .day_keys import CalendarKey, month_prefix, utc_now

logger = get_logger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class DiaryLedger:
    """Ordered, persisted collection of DiaryEntry records.

    Entries are only ever added or re-rated; nothing is deleted.
    """

    def __init__(
        self,
        store: SlotStore,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self._entries: list[DiaryEntry] = []

    @property
    def entries(self) -> list[DiaryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> list[DiaryEntry]:
        data = self.store.load_json(Slot.DIARY)
        entries: list[DiaryEntry] = []
        if data is not None:
            try:
                entries = [DiaryEntry.from_record(item) for item in data]
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(f"Stored diary unreadable, starting empty: {exc}")
                entries = []
        self._entries = sorted(entries, key=lambda e: e.date_key, reverse=True)
        return self.entries

    def entry_for(self, date_key: CalendarKey) -> Optional[DiaryEntry]:
        for entry in self._entries:
            if entry.date_key == date_key:
                return entry
        return None

    def append(self, date_key: CalendarKey, coach_name: str, class_name: str) -> DiaryEntry:
        """Record a completed session for ``date_key``.

        A day already in the ledger keeps its existing entry.
        """

        existing = self.entry_for(date_key)
        if existing is not None:
            logger.warning(f"Diary already has an entry for {date_key}; not adding another")
            return existing

        entry = DiaryEntry(
            id=self.id_factory(),
            date_key=date_key,
            coach_name=coach_name,
            class_name=class_name,
            created_at=self.clock().isoformat(),
        )
        # Stable sort keeps newer insertions ahead of older ones on the same date.
        self._entries = sorted([entry, *self._entries], key=lambda e: e.date_key, reverse=True)
        self._persist()
        return entry

    def rate(self, entry_id: str, rating: Rating | str) -> Optional[DiaryEntry]:
        """Set the rating of ``entry_id``; unknown ids are ignored."""

        rating = Rating(rating)
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                entry.rating = rating
                self._entries[index] = entry
                self._persist()
                return entry
        logger.debug(f"Ignoring rating for unknown diary entry {entry_id}")
        return None

    def _persist(self) -> bool:
        saved = self.store.save_json(Slot.DIARY, [e.to_record() for e in self._entries])
        if not saved:
            logger.warning("Diary kept in memory only; durable write failed")
        return saved


def entries_for_month(entries: Iterable[DiaryEntry], year: int, month: int) -> list[DiaryEntry]:
    """Filter entries down to one calendar month, preserving order."""

    prefix = month_prefix(year, month)
    return [e for e in entries if e.date_key.startswith(prefix)]


def tally_ratings(entries: Iterable[DiaryEntry]) -> dict[str, int]:
    """Count entries per rating label, with unrated entries under ``"unrated"``."""

    counts = Counter(e.rating.value if e.rating else "unrated" for e in entries)
    tally = {rating.value: counts.get(rating.value, 0) for rating in Rating}
    tally["unrated"] = counts.get("unrated", 0)
    return tally


__all__ = ["DiaryLedger", "entries_for_month", "new_id", "tally_ratings"]
