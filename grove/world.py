"""
Tree population container and per-sweep spatial index.

The growth sweep needs two neighbourhood facts: whether a water tile lies
next to a tree, and how many trees stand around it. Both are answered from
a SpatialIndex built once per sweep in O(n), so each lookup is O(1) and a
sweep never degrades to an all-pairs scan.

Neighbourhood = the 8-neighbour ring (Chebyshev distance 1), self excluded.
"""

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from grove.modifiers import Structure
from grove.state import Tree

Coord = tuple[int, int]

RING_OFFSETS: tuple[Coord, ...] = tuple(
    (dx, dz) for dx in (-1, 0, 1) for dz in (-1, 0, 1) if (dx, dz) != (0, 0)
)


def ring(x: int, z: int) -> Iterator[Coord]:
    """The 8 cells surrounding (x, z)."""
    for dx, dz in RING_OFFSETS:
        yield (x + dx, z + dz)


@dataclass(frozen=True)
class SpatialIndex:
    """Read-only neighbourhood lookups for one sweep."""

    water_tiles: frozenset[Coord]
    tree_counts: Counter[Coord]

    @classmethod
    def build(cls, trees: Iterable[Tree], water_tiles: Iterable[Coord]) -> "SpatialIndex":
        return cls(
            water_tiles=frozenset(water_tiles),
            tree_counts=Counter(tree.position for tree in trees),
        )

    def has_adjacent_water(self, x: int, z: int) -> bool:
        return any(cell in self.water_tiles for cell in ring(x, z))

    def adjacent_tree_count(self, x: int, z: int) -> int:
        return sum(self.tree_counts[cell] for cell in ring(x, z))


@dataclass
class Grove:
    """
    The simulated world: trees, water tiles and structures.

    Any entity store would do; this one is a list plus two collections,
    enough for the engines and tests.
    """

    trees: list[Tree] = field(default_factory=list)
    water_tiles: set[Coord] = field(default_factory=set)
    structures: list[Structure] = field(default_factory=list)

    def plant(self, species_id: str, x: int = 0, z: int = 0) -> Tree:
        """Create a seed at (x, z) and add it to the population."""
        tree = Tree(species_id=species_id, x=x, z=z)
        self.trees.append(tree)
        return tree

    def remove(self, tree: Tree) -> None:
        self.trees.remove(tree)

    def add_water(self, x: int, z: int) -> None:
        self.water_tiles.add((x, z))

    def add_structure(self, structure: Structure) -> None:
        self.structures.append(structure)

    def harvestable_trees(self) -> list[Tree]:
        return [tree for tree in self.trees if tree.harvestable is not None]

    def spatial_index(self) -> SpatialIndex:
        return SpatialIndex.build(self.trees, self.water_tiles)
