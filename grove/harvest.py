"""
Harvest readiness and yield composition.

A tree becomes harvest-tracked once it reaches Mature. Its facet stores
the species' base yield and cycle length; a cooldown sweep flips `ready`
once the cycle has elapsed, and only collection flips it back.

Yield is composed late, at collection time, from current state:

    amount = ceil(base * stage * pruned * structures * species_special
                  * difficulty_yield)

so season, nearby structures and pruning changes made after attachment
are honoured. Species specials apply per resource type: a timber bonus
never inflates a co-yielded sap entry.
"""

import logging
import math
from collections.abc import Iterable

from grove.config import DEFAULT_CONFIG, MAX_STAGE, GrowthConfig, Stage
from grove.difficulty import NORMAL, DifficultyTier
from grove.modifiers import Structure, harvest_multiplier
from grove.species import DEFAULT_CATALOG, SpeciesCatalog, SpeciesSpecial, special_for
from grove.state import Harvestable, ResourceAmount, Tree
from grove.world import Grove

logger = logging.getLogger(__name__)

TIMBER = "timber"
FRUIT = "fruit"


def init_harvestable(tree: Tree, catalog: SpeciesCatalog = DEFAULT_CATALOG) -> None:
    """
    Attach (or refresh) the harvestable facet on a Mature+ tree.

    No-op below Mature or for an unknown species. A refresh replaces the
    base-yield and cycle-length snapshot but carries the elapsed cooldown
    and an already-set `ready` forward.
    """
    if tree.stage < Stage.MATURE:
        return

    species = catalog.get(tree.species_id)
    if species is None:
        return

    resources = [ResourceAmount(y.resource, y.amount) for y in species.yield_]
    previous = tree.harvestable

    tree.harvestable = Harvestable(
        resources=resources,
        cooldown_total=species.harvest_cycle_sec,
        # Carried forward so a pruning head start survives the refresh
        cooldown_elapsed=previous.cooldown_elapsed if previous else 0.0,
        ready=previous.ready if previous else False,
    )


def harvest_system(grove: Grove, delta_time: float) -> None:
    """Advance harvest cooldowns; mark facets ready once the cycle elapses."""
    for tree in grove.trees:
        facet = tree.harvestable
        if facet is None or facet.ready:
            continue

        facet.cooldown_elapsed += delta_time
        if facet.cooldown_elapsed >= facet.cooldown_total:
            facet.ready = True
            logger.debug("%s at %s is ready to harvest", tree.species_id, tree.position)


def species_yield_multiplier(
    species_id: str,
    resource_type: str,
    stage: int,
    current_season: str | None,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> float:
    """Per-resource-type species special for a harvest."""
    special = special_for(species_id)

    if special is SpeciesSpecial.DENSE_WOOD:
        if resource_type == TIMBER and stage >= MAX_STAGE:
            return config.dense_wood_timber_multiplier

    if special is SpeciesSpecial.GOLDEN:
        if resource_type == FRUIT and current_season == "autumn":
            return config.golden_fruit_multiplier

    return 1.0


def yield_multiplier(
    tree: Tree,
    resource_type: str,
    current_season: str | None = None,
    structures: Iterable[Structure] = (),
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> float:
    """
    Combined yield multiplier for one resource entry, evaluated now.

    Args:
        tree: The tree being harvested
        resource_type: Resource type of the entry
        current_season: Active season (None if unknown)
        structures: Placed structures (harvest boosts in range apply)
        difficulty: Active difficulty tier
        config: Engine configuration

    Returns:
        Product of stage, pruning, structure, species and difficulty multipliers
    """
    stage_mult = config.old_growth_yield_multiplier if tree.stage >= MAX_STAGE else 1.0
    pruned_mult = config.pruned_yield_multiplier if tree.pruned else 1.0
    structure_mult = harvest_multiplier(tree.x, tree.z, structures)
    special_mult = species_yield_multiplier(
        tree.species_id, resource_type, tree.stage, current_season, config
    )
    return (
        stage_mult
        * pruned_mult
        * structure_mult
        * special_mult
        * difficulty.resource_yield_mult
    )


def collect_harvest(
    tree: Tree,
    current_season: str | None = None,
    structures: Iterable[Structure] = (),
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> list[ResourceAmount] | None:
    """
    Collect a ready harvest.

    Returns None when there is nothing to collect (no facet, or not ready).
    Otherwise returns the multiplied resources, rounded up, and resets the
    cooldown. Pruning is consumed by the collection.
    """
    facet = tree.harvestable
    if facet is None or not facet.ready:
        return None

    # Queried once per entry; may be a one-shot iterator
    structures = list(structures)
    collected = [
        ResourceAmount(
            resource.type,
            math.ceil(
                resource.amount
                * yield_multiplier(
                    tree, resource.type, current_season, structures, difficulty, config
                )
            ),
        )
        for resource in facet.resources
    ]

    facet.ready = False
    facet.cooldown_elapsed = 0.0
    tree.pruned = False

    logger.debug("Collected %s from %s at %s", collected, tree.species_id, tree.position)
    return collected
