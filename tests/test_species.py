"""
Tests for the species catalogue, difficulty tiers and engine config.
"""

import pytest
from pydantic import ValidationError

from grove.config import DEFAULT_CONFIG, GrowthConfig, Stage
from grove.difficulty import (
    DIFFICULTY_TIERS,
    EXPLORE,
    NORMAL,
    DifficultyTier,
    get_difficulty_by_id,
    resolve_difficulty,
)
from grove.species import (
    DEFAULT_CATALOG,
    DEFAULT_SPECIES_RECORDS,
    Species,
    SpeciesCatalog,
    SpeciesSpecial,
    special_for,
)


def make_record(**overrides) -> dict:
    record = {
        "id": "test-tree",
        "difficulty": 1,
        "base_growth_times": [10, 10, 10, 10],
        "harvest_cycle_sec": 30,
        "yield": [{"resource": "timber", "amount": 1}],
    }
    record.update(overrides)
    return record


class TestSpeciesCatalog:
    """Tests for the default catalogue and lookups."""

    def test_default_catalog_contents(self) -> None:
        """All twelve species are present, including the specials."""
        ids = DEFAULT_CATALOG.ids()
        assert len(DEFAULT_CATALOG) == len(DEFAULT_SPECIES_RECORDS) == 12
        for species_id in ("white-oak", "silver-birch", "ironbark", "golden-apple", "mystic-fern"):
            assert species_id in ids

    def test_every_species_has_four_stages(self) -> None:
        """Default data covers stages 0-3 with positive times."""
        for species in DEFAULT_CATALOG:
            assert len(species.base_growth_times) == 4
            assert all(t > 0 for t in species.base_growth_times)

    def test_evergreen_flags(self) -> None:
        """Pines and redwoods are evergreen, oaks are not."""
        assert DEFAULT_CATALOG.get("elder-pine").evergreen
        assert DEFAULT_CATALOG.get("redwood").evergreen
        assert not DEFAULT_CATALOG.get("white-oak").evergreen

    def test_unknown_id_resolves_to_none(self) -> None:
        """Lookup of an unknown id returns None."""
        assert DEFAULT_CATALOG.get("nonexistent") is None
        assert "nonexistent" not in DEFAULT_CATALOG

    def test_yield_alias(self) -> None:
        """Records use the `yield` key."""
        oak = DEFAULT_CATALOG.get("white-oak")
        assert [(y.resource, y.amount) for y in oak.yield_] == [("timber", 2)]

    def test_base_time_out_of_range(self) -> None:
        """Stages past the data return None."""
        species = Species.model_validate(make_record(base_growth_times=[5]))
        assert species.base_time(0) == 5
        assert species.base_time(1) is None
        assert species.base_time(-1) is None

    def test_duplicate_ids_rejected(self) -> None:
        """Catalogue ids must be unique."""
        with pytest.raises(ValueError, match="Duplicate"):
            SpeciesCatalog.from_records([make_record(), make_record()])


class TestSpeciesValidation:
    """Tests for authoring-time validation."""

    def test_difficulty_range(self) -> None:
        """Difficulty must be 1-5."""
        with pytest.raises(ValidationError):
            Species.model_validate(make_record(difficulty=6))

    def test_negative_yield(self) -> None:
        """Yield amounts cannot be negative."""
        with pytest.raises(ValidationError):
            Species.model_validate(make_record(**{"yield": [{"resource": "sap", "amount": -1}]}))

    def test_harvest_cycle_positive(self) -> None:
        """A zero harvest cycle is rejected."""
        with pytest.raises(ValidationError):
            Species.model_validate(make_record(harvest_cycle_sec=0))

    def test_id_without_whitespace(self) -> None:
        """Ids are slugs."""
        with pytest.raises(ValidationError):
            Species.model_validate(make_record(id="white oak"))

    def test_nonpositive_base_times_accepted(self) -> None:
        """Malformed growth times load; the engines freeze on them."""
        species = Species.model_validate(make_record(base_growth_times=[0, -1]))
        assert species.base_growth_times == (0, -1)


class TestSpecials:
    """Tests for the special-rule lookup table."""

    @pytest.mark.parametrize(
        "species_id,special",
        [
            ("ghost-birch", SpeciesSpecial.COLD_HARDY),
            ("silver-birch", SpeciesSpecial.WATER_LOVING),
            ("mystic-fern", SpeciesSpecial.CLUSTERING),
            ("ironbark", SpeciesSpecial.DENSE_WOOD),
            ("golden-apple", SpeciesSpecial.GOLDEN),
            ("white-oak", SpeciesSpecial.NONE),
            ("no-such-tree", SpeciesSpecial.NONE),
            (None, SpeciesSpecial.NONE),
        ],
    )
    def test_lookup(self, species_id: str | None, special: SpeciesSpecial) -> None:
        """Each id maps to its rule; everything else is NONE."""
        assert special_for(species_id) is special

    def test_special_property(self) -> None:
        """Species expose their rule."""
        assert DEFAULT_CATALOG.get("ironbark").special is SpeciesSpecial.DENSE_WOOD


class TestDifficulty:
    """Tests for difficulty tiers."""

    def test_tier_order(self) -> None:
        """Five tiers from easiest to hardest."""
        assert [t.id for t in DIFFICULTY_TIERS] == [
            "explore",
            "normal",
            "hard",
            "brutal",
            "ultra-brutal",
        ]

    def test_normal_is_baseline(self) -> None:
        """Normal scales nothing."""
        assert NORMAL.growth_speed_mult == 1.0
        assert NORMAL.resource_yield_mult == 1.0

    def test_explore_boost(self) -> None:
        """Explore grows and yields 1.3x."""
        assert EXPLORE.growth_speed_mult == pytest.approx(1.3)
        assert EXPLORE.resource_yield_mult == pytest.approx(1.3)

    def test_harder_tiers_are_slower_and_leaner(self) -> None:
        """Growth strictly decreases; yield never increases."""
        for easier, harder in zip(DIFFICULTY_TIERS, DIFFICULTY_TIERS[1:]):
            assert harder.growth_speed_mult < easier.growth_speed_mult
            assert harder.resource_yield_mult <= easier.resource_yield_mult

    def test_ultra_brutal_growth(self) -> None:
        """Ultra brutal grows at 0.4x."""
        assert get_difficulty_by_id("ultra-brutal").growth_speed_mult == pytest.approx(0.4)

    def test_resolve_falls_back_to_normal(self) -> None:
        """Unknown or unset ids resolve to normal."""
        assert get_difficulty_by_id("nightmare") is None
        assert resolve_difficulty("nightmare") is NORMAL
        assert resolve_difficulty(None) is NORMAL
        assert resolve_difficulty("explore") is EXPLORE

    def test_negative_multiplier_rejected(self) -> None:
        """Tiers cannot have negative scalars."""
        with pytest.raises(ValueError):
            DifficultyTier(id="x", name="X", growth_speed_mult=-1.0)


class TestGrowthConfig:
    """Tests for engine configuration."""

    def test_stage_ordinals(self) -> None:
        """Stages run Seed(0) to Old Growth(4)."""
        assert [int(s) for s in Stage] == [0, 1, 2, 3, 4]

    def test_default_tables(self) -> None:
        """Season and difficulty tables hold the game tuning."""
        assert DEFAULT_CONFIG.season_multiplier("spring") == 1.5
        assert DEFAULT_CONFIG.season_multiplier("winter") == 0.0
        assert DEFAULT_CONFIG.season_multiplier("unknown") == 1.0
        assert DEFAULT_CONFIG.difficulty_divisor(5) == 2.5
        assert DEFAULT_CONFIG.difficulty_divisor(0) == 1.0

    def test_terminal_cap_below_one(self) -> None:
        """The terminal progress cap must stay below 1.0."""
        with pytest.raises(ValueError):
            GrowthConfig(terminal_progress_cap=1.0)
