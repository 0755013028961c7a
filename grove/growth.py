"""
Tree growth dynamics - the per-tick stage/progress engine.

Each sweep advances every growing tree by:

    progress += rate * weather * structures * fertilized * species_bonus
                * difficulty_growth * dt

where `rate` comes from calc_growth_rate, the single rate formula shared
with the offline integrator. The sweep then:

1. Builds the spatial index (water tiles, tree counts) once, up front
2. Skips trees at the terminal stage
3. Freezes trees with unknown species or missing/non-positive base times
4. Skips trees whose rate is zero (e.g. deciduous species in winter)
5. Applies structure, fertilizer and species spatial bonuses
6. Rolls over as many stage boundaries as the progress covers
7. Caps terminal progress below 1.0

Missing or malformed data never raises; it means "no growth this tick".
"""

import logging

from grove.config import DEFAULT_CONFIG, MAX_STAGE, GrowthConfig
from grove.difficulty import NORMAL, DifficultyTier
from grove.modifiers import growth_multiplier
from grove.species import DEFAULT_CATALOG, SpeciesCatalog, SpeciesSpecial, special_for
from grove.state import Tree
from grove.world import Grove, SpatialIndex

logger = logging.getLogger(__name__)


def calc_growth_rate(
    base_time: float,
    difficulty: int,
    season: str,
    watered: bool,
    evergreen: bool,
    species_id: str | None = None,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> float:
    """
    Growth rate (progress per second) for one stage.

    rate = (season_mult * water_mult) / (base_time * difficulty_divisor)

    Winter halts deciduous species. Evergreens keep 30% and cold-hardy
    species 50% of their summer rate.

    Args:
        base_time: Seconds to complete the stage at baseline
        difficulty: Species difficulty tier (1-5)
        season: "spring" | "summer" | "autumn" | "winter"
        watered: Whether the one-shot water bonus is active
        evergreen: Whether the species keeps growing in winter
        species_id: Used for species-specific winter rules
        config: Engine configuration

    Returns:
        Progress per second, >= 0
    """
    season_mult = config.season_multiplier(season)

    if season == "winter":
        if special_for(species_id) is SpeciesSpecial.COLD_HARDY:
            season_mult = config.cold_hardy_winter_multiplier
        elif evergreen:
            season_mult = config.evergreen_winter_multiplier

    if season_mult == 0:
        return 0.0

    diff_mult = config.difficulty_divisor(difficulty)
    water_mult = config.water_bonus if watered else 1.0

    if base_time <= 0:
        return 0.0

    return (season_mult * water_mult) / (base_time * diff_mult)


def species_bonus(
    tree: Tree, index: SpatialIndex, config: GrowthConfig = DEFAULT_CONFIG
) -> float:
    """
    Spatial growth bonus from the tree's species special.

    Water-loving species get a flat bonus next to water. Clustering
    species get a per-neighbour bonus, capped.
    """
    special = special_for(tree.species_id)

    if special is SpeciesSpecial.WATER_LOVING:
        if index.has_adjacent_water(tree.x, tree.z):
            return config.near_water_bonus
        return 1.0

    if special is SpeciesSpecial.CLUSTERING:
        neighbors = index.adjacent_tree_count(tree.x, tree.z)
        return 1.0 + min(
            config.cluster_bonus_cap, config.cluster_bonus_per_neighbor * neighbors
        )

    return 1.0


def advance_stages(tree: Tree, config: GrowthConfig = DEFAULT_CONFIG) -> int:
    """
    Roll progress over stage boundaries.

    A single oversized tick can cross several stages. Water and fertilizer
    are one-shot per stage and are cleared on every advance.

    Returns:
        Number of stages advanced
    """
    advanced = 0
    while tree.progress >= 1 and tree.stage < MAX_STAGE:
        tree.progress -= 1
        tree.stage += 1
        tree.watered = False
        tree.fertilized = False
        advanced += 1

    if tree.stage >= MAX_STAGE:
        tree.progress = min(tree.progress, config.terminal_progress_cap)

    return advanced


def growth_system(
    grove: Grove,
    delta_time: float,
    season: str,
    weather_multiplier: float = 1.0,
    catalog: SpeciesCatalog = DEFAULT_CATALOG,
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> None:
    """
    Advance growth for the whole population by one tick.

    Args:
        grove: Tree population, water tiles and structures
        delta_time: Seconds elapsed this tick
        season: Current season
        weather_multiplier: Growth multiplier of the active weather
        catalog: Species data
        difficulty: Active difficulty tier (growth speed scalar)
        config: Engine configuration
    """
    # Neighbourhood lookups are fixed for the whole sweep
    index = grove.spatial_index()

    for tree in grove.trees:
        if tree.stage >= MAX_STAGE:
            continue

        species = catalog.get(tree.species_id)
        if species is None:
            logger.debug("Unknown species %r, growth frozen", tree.species_id)
            continue

        base_time = species.base_time(tree.stage)
        if base_time is None or base_time <= 0:
            logger.debug(
                "No base time for %s at stage %d, growth frozen",
                species.id,
                tree.stage,
            )
            continue

        rate = calc_growth_rate(
            base_time,
            species.difficulty,
            season,
            tree.watered,
            species.evergreen,
            species_id=species.id,
            config=config,
        )
        if rate <= 0:
            continue

        structure_mult = growth_multiplier(tree.x, tree.z, grove.structures)
        fertilized_mult = config.fertilized_multiplier if tree.fertilized else 1.0
        bonus = species_bonus(tree, index, config)

        tree.progress += (
            rate
            * weather_multiplier
            * structure_mult
            * fertilized_mult
            * bonus
            * difficulty.growth_speed_mult
            * delta_time
        )
        tree.total_growth_time += delta_time

        if advance_stages(tree, config):
            logger.debug("%s at %s reached %s", species.id, tree.position, tree.stage_name)
