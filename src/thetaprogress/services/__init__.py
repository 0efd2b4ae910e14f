"""Service module exports."""

from . import (
    announcements,
    day_keys,
    debug,
    diary,
    preferences,
    progress,
    rewards,
    streaks,
    telemetry,
)

__all__ = [
    "announcements",
    "day_keys",
    "debug",
    "diary",
    "preferences",
    "progress",
    "rewards",
    "streaks",
    "telemetry",
]
