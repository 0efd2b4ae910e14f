"""Deterministic reward unlocks at streak milestones.

Each installation carries a fixed seed. At a milestone the seed and the
milestone are hashed together and the result picks one identifier from the
pool for that milestone's tier. The same seed always yields the same rewards,
so nothing here needs mocking in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_MILESTONES

_MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x9E3779B1
_MIX_MULTIPLIER = 0x85EBCA6B

LOW_TIER_POOL = (
    "moon_glow_background",
    "starlight_chime",
    "night_owl_badge",
    "lavender_haze_theme",
)
MID_TIER_POOL = (
    "aurora_background",
    "rainfall_soundscape",
    "constellation_badge",
    "midnight_blue_theme",
)
HIGH_TIER_POOL = (
    "nebula_background",
    "golden_moon_badge",
    "ocean_tide_soundscape",
    "northern_lights_theme",
)


def _rotl32(value: int, shift: int) -> int:
    value &= _MASK32
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def mix_seed(seed: int, milestone: int) -> int:
    """Combine seed and milestone into a 32-bit hash.

    1. scale the milestone by the golden-ratio constant, rotate left 13 bits
    2. XOR with the low 32 bits of the seed
    3. xorshift right 15, multiply by 0x85EBCA6B, xorshift right 13
    """

    h = (seed & _MASK32) ^ _rotl32(milestone * _GOLDEN_GAMMA, 13)
    h ^= h >> 15
    h = (h * _MIX_MULTIPLIER) & _MASK32
    h ^= h >> 13
    return h


@dataclass(frozen=True)
class RewardPools:
    """Reward identifiers per tier and the milestone bands that select them."""

    low: Sequence[str] = LOW_TIER_POOL
    mid: Sequence[str] = MID_TIER_POOL
    high: Sequence[str] = HIGH_TIER_POOL
    mid_from: int = 5
    high_from: int = 10

    def for_milestone(self, milestone: int) -> Sequence[str]:
        if milestone >= self.high_from:
            return self.high
        if milestone >= self.mid_from:
            return self.mid
        return self.low


class RewardEngine:
    """Maps streak values to reward identifiers."""

    def __init__(
        self,
        milestones: Iterable[int] = DEFAULT_MILESTONES,
        pools: RewardPools | None = None,
    ):
        self.milestones = tuple(sorted(set(milestones)))
        self.pools = pools or RewardPools()
        for tier in (self.pools.low, self.pools.mid, self.pools.high):
            if not tier:
                raise ValueError("reward pools must not be empty")

    def select(self, seed: int, milestone: int) -> str:
        pool = self.pools.for_milestone(milestone)
        return pool[mix_seed(seed, milestone) % len(pool)]

    def evaluate(self, current: int, seed: int, unlocked: Iterable[str]) -> Optional[str]:
        """Return the reward earned by reaching ``current``, if any.

        Nothing is returned off-milestone, or when the selected identifier
        was granted before.
        """

        if current not in self.milestones:
            return None
        reward_id = self.select(seed, current)
        if reward_id in set(unlocked):
            return None
        return reward_id

    def next_milestone(self, current: int) -> Optional[int]:
        for milestone in self.milestones:
            if milestone > current:
                return milestone
        return None

    def preview(self, current: int, seed: int, unlocked: Iterable[str]) -> Optional[str]:
        """Return what the next milestone would grant, or None."""

        milestone = self.next_milestone(current)
        if milestone is None:
            return None
        return self.evaluate(milestone, seed, unlocked)


__all__ = ["RewardEngine", "RewardPools", "mix_seed"]
