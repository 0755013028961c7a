"""
Headless tick loop.

Runs the engines in the order the game loop does, once per tick:

1. Growth sweep (season, weather, difficulty)
2. Harvest cooldown sweep
3. Promotion of newly Mature trees to harvest tracking
4. Optional collection of ready harvests into a running ledger

The result is a Trajectory holding per-tree stage/progress history and
harvest totals, useful for balancing and for diagnostics plots.
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field

from grove import growth, harvest
from grove.config import DEFAULT_CONFIG, SEASONS, GrowthConfig
from grove.difficulty import NORMAL, DifficultyTier
from grove.species import DEFAULT_CATALOG, SpeciesCatalog
from grove.world import Grove

SeasonFn = Callable[[float], str]


@dataclass(frozen=True)
class SeasonClock:
    """
    Maps elapsed game seconds to a season.

    Seasons cycle spring -> summer -> autumn -> winter, each lasting
    `season_length` seconds, starting from `start`.
    """

    season_length: float
    start: str = "spring"

    def __post_init__(self) -> None:
        if self.season_length <= 0:
            raise ValueError("season_length must be positive")
        if self.start not in SEASONS:
            raise ValueError(f"Unknown season: {self.start}")

    def __call__(self, elapsed: float) -> str:
        offset = SEASONS.index(self.start)
        index = int(elapsed // self.season_length) + offset
        return SEASONS[index % len(SEASONS)]


@dataclass
class Trajectory:
    """
    Complete record of a headless run.

    Contains:
    - times: Elapsed seconds after each tick (0.0 first, for the initial state)
    - stages / progress: One history list per tree, aligned with `times`
    - ready_counts: Number of harvest-ready trees after each tick
    - seasons: Season used for each tick
    - harvested: Collected resource totals (when collection is enabled)
    """

    times: list[float]
    stages: list[list[int]]
    progress: list[list[float]]
    ready_counts: list[int]
    seasons: list[str]
    harvested: dict[str, int] = field(default_factory=dict)

    def final_stages(self) -> list[int]:
        return [history[-1] for history in self.stages]

    def get_scalar_summary(self) -> dict[str, float]:
        """
        Scalar diagnostics of the run.

        - Ticks: Number of ticks simulated
        - Elapsed: Total simulated seconds
        - Trees: Population size
        - MeanStage: Average final stage
        - Mature: Trees at Mature or beyond at the end
        - PeakReady: Largest number of simultaneously ready trees
        - Harvested: Total units collected across resource types
        """
        final = self.final_stages()
        return {
            "Ticks": len(self.seasons),
            "Elapsed": self.times[-1] if self.times else 0.0,
            "Trees": len(final),
            "MeanStage": sum(final) / len(final) if final else 0.0,
            "Mature": sum(1 for stage in final if stage >= 3),
            "PeakReady": max(self.ready_counts, default=0),
            "Harvested": sum(self.harvested.values()),
        }

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_scalar_summary()
        print("\n" + "=" * 40)
        print("GROVE SUMMARY")
        print("=" * 40)
        for key, value in summary.items():
            if isinstance(value, int):
                print(f"{key:20s}: {value:>10d}")
            else:
                print(f"{key:20s}: {value:>10.3f}")
        for resource, amount in sorted(self.harvested.items()):
            print(f"  {resource:18s}: {amount:>10d}")
        print("=" * 40)


def run_ticks(
    grove: Grove,
    num_ticks: int,
    delta_time: float,
    season: str | SeasonFn = "summer",
    weather_multiplier: float = 1.0,
    catalog: SpeciesCatalog = DEFAULT_CATALOG,
    difficulty: DifficultyTier = NORMAL,
    collect: bool = False,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> Trajectory:
    """
    Run the tick loop `num_ticks` times.

    Args:
        grove: Population to simulate (mutated in place)
        num_ticks: Number of ticks
        delta_time: Seconds per tick
        season: Fixed season, or a function of elapsed seconds
        weather_multiplier: Weather growth multiplier for every tick
        catalog: Species data
        difficulty: Active difficulty tier
        collect: Collect ready harvests each tick
        config: Engine configuration

    Returns:
        Trajectory of the run
    """
    season_at: SeasonFn = season if callable(season) else (lambda _t: season)

    times = [0.0]
    stages = [[tree.stage] for tree in grove.trees]
    progress = [[tree.progress] for tree in grove.trees]
    ready_counts: list[int] = []
    seasons: list[str] = []
    harvested: dict[str, int] = defaultdict(int)

    elapsed = 0.0
    for _ in range(num_ticks):
        current = season_at(elapsed)
        seasons.append(current)

        growth.growth_system(
            grove,
            delta_time,
            current,
            weather_multiplier=weather_multiplier,
            catalog=catalog,
            difficulty=difficulty,
            config=config,
        )
        harvest.harvest_system(grove, delta_time)

        for tree in grove.trees:
            if tree.stage >= 3 and tree.harvestable is None:
                harvest.init_harvestable(tree, catalog)

        if collect:
            for tree in grove.trees:
                collected = harvest.collect_harvest(
                    tree, current, grove.structures, difficulty, config
                )
                for resource in collected or ():
                    harvested[resource.type] += resource.amount

        elapsed += delta_time
        times.append(elapsed)
        ready_counts.append(sum(1 for tree in grove.trees if tree.is_ready))
        for index, tree in enumerate(grove.trees):
            stages[index].append(tree.stage)
            progress[index].append(tree.progress)

    return Trajectory(
        times=times,
        stages=stages,
        progress=progress,
        ready_counts=ready_counts,
        seasons=seasons,
        harvested=dict(harvested),
    )
