"""Slot store protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.slot import Slot


class SlotStore(Protocol):
    """Durable key/value storage for serialized state slices."""

    def load(self, slot: Slot) -> Optional[str]:
        """Return the stored value, or None when never written or unreadable."""
        ...

    def save(self, slot: Slot, value: str) -> bool:
        """Write a value; False when the write failed."""
        ...

    def delete(self, slot: Slot) -> bool:
        """Remove a slot; False when the delete failed."""
        ...

    def load_json(self, slot: Slot) -> Optional[Any]:
        """Load and decode a JSON record, treating malformed data as absent."""
        ...

    def save_json(self, slot: Slot, payload: Any) -> bool:
        """Encode and write a JSON record."""
        ...
