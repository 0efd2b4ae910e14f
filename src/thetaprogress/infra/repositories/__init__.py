"""Concrete repository implementations using SQLModel."""

from .slot import SQLModelSlotRepository

__all__ = ["SQLModelSlotRepository"]
