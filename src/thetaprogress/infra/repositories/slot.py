"""SQLModel implementation of the slot store.

Reads and writes never raise on storage failure: errors are logged and the
caller keeps working from its in-memory state.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.slot import Slot, StoredSlot

logger = get_logger(__name__)


class SQLModelSlotRepository:
    """SQLModel-based key/value repository, one row per slot."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load(self, slot: Slot) -> Optional[str]:
        try:
            with self.session_factory() as session:
                row = session.exec(select(StoredSlot).where(StoredSlot.key == slot.value)).first()
                return row.value if row else None
        except SQLAlchemyError as exc:
            logger.error(f"Failed to read slot {slot.value}: {exc}", exc_info=True)
            return None

    def save(self, slot: Slot, value: str) -> bool:
        try:
            with self.session_factory() as session:
                row = session.exec(select(StoredSlot).where(StoredSlot.key == slot.value)).first()
                if row:
                    row.value = value
                    row.updated_at = datetime.now(timezone.utc)
                else:
                    row = StoredSlot(key=slot.value, value=value)
                session.add(row)
                session.commit()
            return True
        except SQLAlchemyError as exc:
            logger.error(f"Failed to write slot {slot.value}: {exc}", exc_info=True)
            return False

    def delete(self, slot: Slot) -> bool:
        try:
            with self.session_factory() as session:
                row = session.exec(select(StoredSlot).where(StoredSlot.key == slot.value)).first()
                if row:
                    session.delete(row)
                    session.commit()
            return True
        except SQLAlchemyError as exc:
            logger.error(f"Failed to delete slot {slot.value}: {exc}", exc_info=True)
            return False

    def load_json(self, slot: Slot) -> Optional[Any]:
        raw = self.load(slot)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding malformed record in slot {slot.value}")
            return None

    def save_json(self, slot: Slot, payload: Any) -> bool:
        return self.save(slot, json.dumps(payload, separators=(",", ":")))


__all__ = ["SQLModelSlotRepository"]
