"""
Player care actions on a single tree.

Each action returns True when it changed the tree and False when its
precondition was not met; none of them raise.

- water: +30% growth until the next stage advance
- fertilize: 2x growth until the next stage advance
- prune: Mature+ only; +50% on the next harvest and a 30% head start on
  the current harvest cooldown
"""

from grove.config import DEFAULT_CONFIG, MAX_STAGE, GrowthConfig, Stage
from grove.harvest import init_harvestable
from grove.species import DEFAULT_CATALOG, SpeciesCatalog
from grove.state import Tree


def water_tree(tree: Tree) -> bool:
    if tree.watered or tree.stage >= MAX_STAGE:
        return False
    tree.watered = True
    return True


def fertilize_tree(tree: Tree) -> bool:
    if tree.fertilized or tree.stage >= MAX_STAGE:
        return False
    tree.fertilized = True
    return True


def prune_tree(
    tree: Tree,
    catalog: SpeciesCatalog = DEFAULT_CATALOG,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Prune a Mature or Old Growth tree.

    The cooldown head start is applied before the facet is refreshed, and
    the refresh carries it forward.
    """
    if tree.stage < Stage.MATURE:
        return False

    facet = tree.harvestable
    if facet is not None:
        facet.cooldown_elapsed += facet.cooldown_total * config.prune_cooldown_fraction

    tree.pruned = True

    if facet is not None:
        init_harvestable(tree, catalog)
    return True
