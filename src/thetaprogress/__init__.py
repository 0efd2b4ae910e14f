"""Theta progress engine: streaks, rewards, diary and announcements."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .context import ProgressContext, create_progress_context

__all__ = ["BaseConfig", "DevConfig", "ProgressContext", "create_progress_context"]
