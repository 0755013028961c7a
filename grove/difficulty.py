"""
Game difficulty tiers.

A tier scales how fast every tree grows and how much every harvest yields.
Tiers are ordered from easiest to hardest; both scalars are non-increasing
along that order. "normal" is the 1.0 baseline and the fallback for any
unrecognised id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DifficultyTier:
    """Numeric multipliers for one difficulty tier."""

    id: str
    name: str
    growth_speed_mult: float = 1.0  # Applied to every growth rate
    resource_yield_mult: float = 1.0  # Applied to every harvest

    def __post_init__(self) -> None:
        if self.growth_speed_mult < 0:
            raise ValueError("growth_speed_mult must be nonnegative")
        if self.resource_yield_mult < 0:
            raise ValueError("resource_yield_mult must be nonnegative")


EXPLORE = DifficultyTier(
    id="explore", name="Explore", growth_speed_mult=1.3, resource_yield_mult=1.3
)
NORMAL = DifficultyTier(id="normal", name="Normal")
HARD = DifficultyTier(
    id="hard", name="Hard", growth_speed_mult=0.8, resource_yield_mult=0.85
)
BRUTAL = DifficultyTier(
    id="brutal", name="Brutal", growth_speed_mult=0.6, resource_yield_mult=0.7
)
ULTRA_BRUTAL = DifficultyTier(
    id="ultra-brutal",
    name="Ultra Brutal",
    growth_speed_mult=0.4,
    resource_yield_mult=0.5,
)

DIFFICULTY_TIERS: tuple[DifficultyTier, ...] = (
    EXPLORE,
    NORMAL,
    HARD,
    BRUTAL,
    ULTRA_BRUTAL,
)


def get_difficulty_by_id(difficulty_id: str) -> DifficultyTier | None:
    for tier in DIFFICULTY_TIERS:
        if tier.id == difficulty_id:
            return tier
    return None


def resolve_difficulty(difficulty_id: str | None) -> DifficultyTier:
    """Tier for an id, falling back to NORMAL when unknown or unset."""
    if difficulty_id is None:
        return NORMAL
    return get_difficulty_by_id(difficulty_id) or NORMAL
