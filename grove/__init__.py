"""
Grove Simulation Module

Tree lifecycle engine for a persistent-world game: germination through
old growth, and the harvesting of mature yield.

Modules:
    config: Constants, lifecycle stages and engine configuration
    species: Species catalogue and per-species special rules
    difficulty: Difficulty tiers (growth speed, harvest yield)
    modifiers: Weather and structure multipliers
    state: Tree and harvestable facet data
    world: Tree population and per-sweep spatial index
    growth: Per-tick growth rate and stage engine
    harvest: Harvest readiness and yield composition
    offline: Closed-form offline catch-up (scalar and vectorised)
    care: Water, fertilize and prune actions
    rollout: Headless tick loop
    visualization: Diagnostic plots (imported separately, needs matplotlib)
"""

from grove.care import fertilize_tree, prune_tree, water_tree
from grove.config import DEFAULT_CONFIG, MAX_STAGE, SEASONS, GrowthConfig, Stage
from grove.difficulty import (
    DIFFICULTY_TIERS,
    NORMAL,
    DifficultyTier,
    get_difficulty_by_id,
    resolve_difficulty,
)
from grove.growth import calc_growth_rate, growth_system, species_bonus
from grove.harvest import (
    collect_harvest,
    harvest_system,
    init_harvestable,
    yield_multiplier,
)
from grove.modifiers import (
    EffectType,
    Structure,
    StructureEffect,
    growth_multiplier,
    harvest_multiplier,
    weather_growth_multiplier,
)
from grove.offline import (
    OfflineGrowthResult,
    apply_offline_growth,
    calculate_all_offline_growth,
    calculate_offline_growth,
    offline_growth_arrays,
    offline_growth_batch,
)
from grove.rollout import SeasonClock, Trajectory, run_ticks
from grove.species import (
    DEFAULT_CATALOG,
    Species,
    SpeciesCatalog,
    SpeciesSpecial,
    YieldEntry,
)
from grove.state import Harvestable, ResourceAmount, Tree
from grove.world import Grove, SpatialIndex

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "GrowthConfig",
    "MAX_STAGE",
    "SEASONS",
    "Stage",
    # Species
    "DEFAULT_CATALOG",
    "Species",
    "SpeciesCatalog",
    "SpeciesSpecial",
    "YieldEntry",
    # Difficulty
    "DIFFICULTY_TIERS",
    "NORMAL",
    "DifficultyTier",
    "get_difficulty_by_id",
    "resolve_difficulty",
    # Modifiers
    "EffectType",
    "Structure",
    "StructureEffect",
    "growth_multiplier",
    "harvest_multiplier",
    "weather_growth_multiplier",
    # State
    "Grove",
    "Harvestable",
    "ResourceAmount",
    "SpatialIndex",
    "Tree",
    # Growth
    "calc_growth_rate",
    "growth_system",
    "species_bonus",
    # Harvest
    "collect_harvest",
    "harvest_system",
    "init_harvestable",
    "yield_multiplier",
    # Offline
    "OfflineGrowthResult",
    "apply_offline_growth",
    "calculate_all_offline_growth",
    "calculate_offline_growth",
    "offline_growth_arrays",
    "offline_growth_batch",
    # Care
    "fertilize_tree",
    "prune_tree",
    "water_tree",
    # Simulation
    "SeasonClock",
    "Trajectory",
    "run_ticks",
]
