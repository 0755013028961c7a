"""
Modifier providers consumed by the growth and harvest engines.

Weather:
    A per-tick growth multiplier keyed by the active weather event.
    clear 1.0, rain 1.3, drought 0.5, windstorm 1.0, unknown 1.0.

Structures:
    Player-built structures carry an optional effect with a type, a radius
    (world units, Euclidean) and a magnitude. A query at a position sums the
    magnitudes of every in-range effect of one type:

        multiplier = 1 + sum(magnitude for effects in range)

    With no structure in range the multiplier is exactly 1.0.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class EffectType(str, Enum):
    GROWTH_BOOST = "growth_boost"
    HARVEST_BOOST = "harvest_boost"
    STAMINA_REGEN = "stamina_regen"
    STORAGE = "storage"


WEATHER_GROWTH_MULTIPLIERS: dict[str, float] = {
    "clear": 1.0,
    "rain": 1.3,
    "drought": 0.5,
    "windstorm": 1.0,
}


def weather_growth_multiplier(weather: str) -> float:
    """Growth multiplier for a weather event (1.0 for unknown events)."""
    return WEATHER_GROWTH_MULTIPLIERS.get(weather, 1.0)


@dataclass(frozen=True)
class StructureEffect:
    """Area effect emitted by a structure."""

    type: EffectType
    radius: float
    magnitude: float

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("Effect radius must be nonnegative")


@dataclass(frozen=True)
class Structure:
    """A placed structure at world position (x, z)."""

    kind: str
    x: float
    z: float
    effect: StructureEffect | None = None


def effects_at_position(
    x: float, z: float, structures: Iterable[Structure]
) -> list[StructureEffect]:
    """All structure effects whose radius covers (x, z)."""
    effects: list[StructureEffect] = []
    for structure in structures:
        effect = structure.effect
        if effect is None:
            continue
        if math.hypot(x - structure.x, z - structure.z) <= effect.radius:
            effects.append(effect)
    return effects


def _boost(
    x: float, z: float, structures: Iterable[Structure], effect_type: EffectType
) -> float:
    bonus = 0.0
    for effect in effects_at_position(x, z, structures):
        if effect.type == effect_type:
            bonus += effect.magnitude
    return 1.0 + bonus


def growth_multiplier(x: float, z: float, structures: Iterable[Structure]) -> float:
    """Combined growth boost of nearby structures (1.0 with none in range)."""
    return _boost(x, z, structures, EffectType.GROWTH_BOOST)


def harvest_multiplier(x: float, z: float, structures: Iterable[Structure]) -> float:
    """Combined harvest boost of nearby structures (1.0 with none in range)."""
    return _boost(x, z, structures, EffectType.HARVEST_BOOST)
