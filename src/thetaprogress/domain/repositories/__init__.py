"""Repository protocol definitions for domain layer."""

from .slot import SlotStore

__all__ = ["SlotStore"]
