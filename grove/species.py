"""
Species catalogue for the tree lifecycle simulation.

Each species entry carries its per-stage growth times, difficulty tier,
evergreen flag, harvest cycle and base yield. Entries are validated with
pydantic on construction so authoring mistakes surface when the catalogue
is built, never inside a simulation sweep.

A handful of species follow hard-coded special rules instead of generic
data fields. Those rules are looked up by species id in SPECIES_SPECIALS:

    cold_hardy    ghost-birch   grows at 50% in winter
    water_loving  silver-birch  +20% growth next to a water tile
    clustering    mystic-fern   +15% growth per neighbouring tree (max +60%)
    dense_wood    ironbark      3x timber at Old Growth
    golden        golden-apple  3x fruit in autumn
"""

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpeciesSpecial(str, Enum):
    """Closed set of per-species exceptions to the generic formulas."""

    NONE = "none"
    COLD_HARDY = "cold_hardy"
    WATER_LOVING = "water_loving"
    CLUSTERING = "clustering"
    DENSE_WOOD = "dense_wood"
    GOLDEN = "golden"


SPECIES_SPECIALS: dict[str, SpeciesSpecial] = {
    "ghost-birch": SpeciesSpecial.COLD_HARDY,
    "silver-birch": SpeciesSpecial.WATER_LOVING,
    "mystic-fern": SpeciesSpecial.CLUSTERING,
    "ironbark": SpeciesSpecial.DENSE_WOOD,
    "golden-apple": SpeciesSpecial.GOLDEN,
}


def special_for(species_id: str | None) -> SpeciesSpecial:
    """Special rule for a species id (NONE for ordinary or unknown ids)."""
    if species_id is None:
        return SpeciesSpecial.NONE
    return SPECIES_SPECIALS.get(species_id, SpeciesSpecial.NONE)


class YieldEntry(BaseModel):
    """One resource produced per harvest cycle."""

    model_config = ConfigDict(frozen=True)

    resource: str = Field(min_length=1, description="Resource type id")
    amount: float = Field(ge=0, description="Base amount per cycle")


class Species(BaseModel):
    """
    Read-only species data.

    base_growth_times holds seconds to complete stages 0-3. Shorter tuples
    and non-positive entries are accepted: the engines treat them as
    "growth frozen at that stage" rather than an error.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = ""
    difficulty: int = Field(ge=1, le=5, description="Growth difficulty tier")
    base_growth_times: tuple[float, ...] = Field(
        description="Seconds to complete each stage 0-3"
    )
    evergreen: bool = False
    harvest_cycle_sec: float = Field(gt=0, description="Harvest cooldown")
    yield_: tuple[YieldEntry, ...] = Field(default=(), alias="yield")
    biome: str = ""
    unlock_level: int = Field(default=1, ge=1)

    @field_validator("id")
    @classmethod
    def _id_is_slug(cls, value: str) -> str:
        if value != value.strip() or " " in value:
            raise ValueError("Species id must not contain whitespace")
        return value

    @property
    def special(self) -> SpeciesSpecial:
        return special_for(self.id)

    def base_time(self, stage: int) -> float | None:
        """Seconds to complete `stage`, or None when the data has no entry."""
        if 0 <= stage < len(self.base_growth_times):
            return self.base_growth_times[stage]
        return None


class SpeciesCatalog:
    """Lookup of species by id. Unknown ids resolve to None."""

    def __init__(self, species: Iterable[Species]) -> None:
        self._by_id: dict[str, Species] = {}
        for entry in species:
            if entry.id in self._by_id:
                raise ValueError(f"Duplicate species id: {entry.id}")
            self._by_id[entry.id] = entry

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "SpeciesCatalog":
        """Build a catalogue from plain dicts (e.g. parsed JSON data)."""
        return cls(Species.model_validate(record) for record in records)

    def get(self, species_id: str) -> Species | None:
        return self._by_id.get(species_id)

    def __contains__(self, species_id: object) -> bool:
        return species_id in self._by_id

    def __iter__(self) -> Iterator[Species]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def ids(self) -> list[str]:
        return list(self._by_id)


DEFAULT_SPECIES_RECORDS: list[dict] = [
    {
        "id": "white-oak",
        "name": "White Oak",
        "difficulty": 1,
        "unlock_level": 1,
        "biome": "Temperate",
        "base_growth_times": (10, 15, 20, 25),
        "evergreen": False,
        "harvest_cycle_sec": 45,
        "yield": [{"resource": "timber", "amount": 2}],
    },
    {
        "id": "weeping-willow",
        "name": "Weeping Willow",
        "difficulty": 2,
        "unlock_level": 2,
        "biome": "Wetland",
        "base_growth_times": (12, 18, 24, 30),
        "evergreen": False,
        "harvest_cycle_sec": 60,
        "yield": [{"resource": "sap", "amount": 3}],
    },
    {
        "id": "elder-pine",
        "name": "Elder Pine",
        "difficulty": 2,
        "unlock_level": 3,
        "biome": "Mountain",
        "base_growth_times": (12, 16, 22, 28),
        "evergreen": True,
        "harvest_cycle_sec": 50,
        "yield": [
            {"resource": "timber", "amount": 2},
            {"resource": "sap", "amount": 1},
        ],
    },
    {
        "id": "cherry-blossom",
        "name": "Cherry Blossom",
        "difficulty": 3,
        "unlock_level": 5,
        "biome": "Temperate",
        "base_growth_times": (15, 22, 30, 38),
        "evergreen": False,
        "harvest_cycle_sec": 75,
        "yield": [{"resource": "fruit", "amount": 2}],
    },
    {
        "id": "ghost-birch",
        "name": "Ghost Birch",
        "difficulty": 3,
        "unlock_level": 6,
        "biome": "Tundra Edge",
        "base_growth_times": (14, 20, 28, 36),
        "evergreen": False,
        "harvest_cycle_sec": 55,
        "yield": [
            {"resource": "sap", "amount": 2},
            {"resource": "acorns", "amount": 1},
        ],
    },
    {
        "id": "redwood",
        "name": "Redwood",
        "difficulty": 4,
        "unlock_level": 8,
        "biome": "Coastal",
        "base_growth_times": (20, 30, 45, 60),
        "evergreen": True,
        "harvest_cycle_sec": 120,
        "yield": [{"resource": "timber", "amount": 5}],
    },
    {
        "id": "silver-birch",
        "name": "Silver Birch",
        "difficulty": 2,
        "unlock_level": 9,
        "biome": "Wetland",
        "base_growth_times": (12, 18, 24, 30),
        "evergreen": False,
        "harvest_cycle_sec": 55,
        "yield": [
            {"resource": "sap", "amount": 2},
            {"resource": "timber", "amount": 1},
        ],
    },
    {
        "id": "flame-maple",
        "name": "Flame Maple",
        "difficulty": 4,
        "unlock_level": 10,
        "biome": "Highland",
        "base_growth_times": (18, 26, 36, 48),
        "evergreen": False,
        "harvest_cycle_sec": 90,
        "yield": [{"resource": "fruit", "amount": 3}],
    },
    {
        "id": "baobab",
        "name": "Baobab",
        "difficulty": 5,
        "unlock_level": 12,
        "biome": "Savanna",
        "base_growth_times": (25, 35, 50, 65),
        "evergreen": False,
        "harvest_cycle_sec": 150,
        "yield": [
            {"resource": "timber", "amount": 2},
            {"resource": "sap", "amount": 2},
            {"resource": "fruit", "amount": 2},
        ],
    },
    {
        "id": "ironbark",
        "name": "Ironbark",
        "difficulty": 4,
        "unlock_level": 14,
        "biome": "Highland",
        "base_growth_times": (22, 32, 44, 58),
        "evergreen": True,
        "harvest_cycle_sec": 100,
        "yield": [
            {"resource": "timber", "amount": 4},
            {"resource": "sap", "amount": 1},
        ],
    },
    {
        "id": "golden-apple",
        "name": "Golden Apple",
        "difficulty": 4,
        "unlock_level": 18,
        "biome": "Orchard",
        "base_growth_times": (18, 26, 36, 48),
        "evergreen": False,
        "harvest_cycle_sec": 80,
        "yield": [{"resource": "fruit", "amount": 3}],
    },
    {
        "id": "mystic-fern",
        "name": "Mystic Fern",
        "difficulty": 5,
        "unlock_level": 22,
        "biome": "Enchanted Grove",
        "base_growth_times": (20, 28, 40, 52),
        "evergreen": True,
        "harvest_cycle_sec": 70,
        "yield": [
            {"resource": "sap", "amount": 2},
            {"resource": "acorns", "amount": 2},
        ],
    },
]

DEFAULT_CATALOG = SpeciesCatalog.from_records(DEFAULT_SPECIES_RECORDS)
