"""
Configuration and type definitions for the tree lifecycle simulation.

This module defines all constants and the lifecycle stage ordinals used by
the growth, harvest and offline catch-up engines.

Lifecycle:
    0 Seed -> 1 Sprout -> 2 Sapling -> 3 Mature -> 4 Old Growth (terminal)

Growth rate (progress per second):
    rate = (season_mult * water_mult) / (base_time * difficulty_divisor)

Every engine function takes an optional GrowthConfig so tests can vary
individual constants without touching module globals.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class Stage(IntEnum):
    """Discrete lifecycle phase of a tree."""

    SEED = 0
    SPROUT = 1
    SAPLING = 2
    MATURE = 3
    OLD_GROWTH = 4


STAGE_NAMES = ("Seed", "Sprout", "Sapling", "Mature", "Old Growth")

MAX_STAGE = int(Stage.OLD_GROWTH)

SEASONS = ("spring", "summer", "autumn", "winter")


@dataclass(frozen=True)
class GrowthConfig:
    """
    Complete engine configuration.

    Defaults are the tuning used by the game. Values are plain floats so the
    same config drives the per-tick sweep and the offline integrator.
    """

    # Season multipliers (unknown season is treated as summer)
    season_multipliers: dict[str, float] = field(
        default_factory=lambda: {
            "spring": 1.5,
            "summer": 1.0,
            "autumn": 0.8,
            "winter": 0.0,
        }
    )
    unknown_season_multiplier: float = 1.0

    # Winter overrides for species that keep growing through winter
    cold_hardy_winter_multiplier: float = 0.5
    evergreen_winter_multiplier: float = 0.3

    # Species difficulty (1-5) -> growth time divisor. Ascending: harder
    # species take longer per stage.
    difficulty_divisors: dict[int, float] = field(
        default_factory=lambda: {1: 1.0, 2: 1.3, 3: 1.6, 4: 2.0, 5: 2.5}
    )
    unknown_difficulty_divisor: float = 1.0

    # One-shot care bonuses (cleared on stage advance)
    water_bonus: float = 1.3
    fertilized_multiplier: float = 2.0

    # Progress reported at the terminal stage never reaches 1.0
    terminal_progress_cap: float = 0.99

    # Species spatial bonuses
    near_water_bonus: float = 1.2
    cluster_bonus_per_neighbor: float = 0.15
    cluster_bonus_cap: float = 0.6

    # Harvest multipliers
    old_growth_yield_multiplier: float = 1.5
    pruned_yield_multiplier: float = 1.5
    dense_wood_timber_multiplier: float = 3.0
    golden_fruit_multiplier: float = 3.0

    # Pruning advances an existing harvest cooldown by this fraction
    prune_cooldown_fraction: float = 0.3

    # Offline catch-up: capped at 24 hours, summer-equivalent, unwatered
    max_offline_seconds: float = 86400.0
    offline_season: str = "summer"

    def __post_init__(self) -> None:
        if self.terminal_progress_cap >= 1.0:
            raise ValueError("terminal_progress_cap must be below 1.0")
        if self.max_offline_seconds < 0:
            raise ValueError("max_offline_seconds must be nonnegative")

    def season_multiplier(self, season: str) -> float:
        """Base season multiplier before winter overrides."""
        return self.season_multipliers.get(season, self.unknown_season_multiplier)

    def difficulty_divisor(self, difficulty: int) -> float:
        return self.difficulty_divisors.get(difficulty, self.unknown_difficulty_divisor)


DEFAULT_CONFIG = GrowthConfig()
