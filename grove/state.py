"""
Mutable state owned by each tree.

A Tree is created at stage 0 / progress 0 by a planting action and mutated
in place by the growth sweep, the harvest engine and the care actions. The
Harvestable facet is attached only once the tree reaches Mature.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from grove.config import MAX_STAGE, STAGE_NAMES


class ResourceAmount(NamedTuple):
    """A quantity of one resource type."""

    type: str
    amount: float


@dataclass
class Harvestable:
    """
    Harvest readiness for a mature tree.

    `resources` is the species' base per-cycle yield, captured verbatim at
    attachment. Multipliers are never baked into it; they are evaluated at
    collection time.
    """

    resources: list[ResourceAmount]
    cooldown_total: float
    cooldown_elapsed: float = 0.0
    ready: bool = False


@dataclass
class Tree:
    """One planted or spawned tree."""

    species_id: str
    x: int = 0
    z: int = 0
    stage: int = 0
    progress: float = 0.0
    watered: bool = False
    fertilized: bool = False
    pruned: bool = False
    total_growth_time: float = 0.0
    harvestable: Harvestable | None = field(default=None, repr=False)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.z)

    @property
    def stage_name(self) -> str:
        return STAGE_NAMES[max(0, min(self.stage, MAX_STAGE))]

    @property
    def is_terminal(self) -> bool:
        return self.stage >= MAX_STAGE

    @property
    def is_ready(self) -> bool:
        """True when a harvest can be collected right now."""
        return self.harvestable is not None and self.harvestable.ready
