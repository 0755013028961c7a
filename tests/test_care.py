"""
Tests for player care actions.
"""

import pytest

from grove import care, harvest
from grove.state import Tree
from grove.world import Grove


class TestWaterAndFertilize:
    """Tests for the one-shot growth bonuses."""

    def test_water_sets_flag_once(self) -> None:
        """Watering twice in one stage is refused."""
        tree = Tree("white-oak")
        assert care.water_tree(tree) is True
        assert tree.watered is True
        assert care.water_tree(tree) is False

    def test_fertilize_sets_flag_once(self) -> None:
        """Fertilizing twice in one stage is refused."""
        tree = Tree("white-oak")
        assert care.fertilize_tree(tree) is True
        assert tree.fertilized is True
        assert care.fertilize_tree(tree) is False

    def test_terminal_tree_refuses_care(self) -> None:
        """Old Growth trees no longer grow, so care is refused."""
        tree = Tree("white-oak", stage=4)
        assert care.water_tree(tree) is False
        assert care.fertilize_tree(tree) is False

    def test_watering_speeds_growth(self) -> None:
        """A watered tree in a grove grows 1.3x faster."""
        from grove.growth import growth_system

        grove = Grove()
        wet = grove.plant("white-oak", x=0, z=0)
        dry = grove.plant("white-oak", x=9, z=9)
        care.water_tree(wet)

        growth_system(grove, 0.5, "summer")

        assert wet.progress / dry.progress == pytest.approx(1.3)


class TestPrune:
    """Tests for pruning."""

    def test_immature_tree_cannot_be_pruned(self) -> None:
        """Only Mature and Old Growth trees can be pruned."""
        tree = Tree("white-oak", stage=2)
        assert care.prune_tree(tree) is False
        assert tree.pruned is False

    def test_prune_without_facet(self) -> None:
        """Pruning before tracking starts only sets the flag."""
        tree = Tree("white-oak", stage=3)
        assert care.prune_tree(tree) is True
        assert tree.pruned is True
        assert tree.harvestable is None

    def test_prune_advances_cooldown(self) -> None:
        """Pruning gives a 30% head start that survives the facet refresh."""
        tree = Tree("white-oak", stage=3)
        harvest.init_harvestable(tree)
        assert tree.harvestable is not None
        tree.harvestable.cooldown_elapsed = 10.0

        care.prune_tree(tree)

        assert tree.harvestable.cooldown_elapsed == pytest.approx(10.0 + 0.3 * 45)
        assert tree.pruned is True

    def test_pruned_harvest_bonus_consumed(self) -> None:
        """The next collection is 1.5x and clears pruning."""
        grove = Grove()
        tree = grove.plant("white-oak")
        tree.stage = 3
        harvest.init_harvestable(tree)
        care.prune_tree(tree)

        harvest.harvest_system(grove, 45)
        first = harvest.collect_harvest(tree)
        harvest.harvest_system(grove, 45)
        second = harvest.collect_harvest(tree)

        assert first is not None and second is not None
        assert first[0].amount == 3
        assert second[0].amount == 2
        assert tree.pruned is False
