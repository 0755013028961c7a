"""
Offline catch-up integrator.

When the player returns after time away, trees grow by the elapsed real
time without simulating every frame. Within a stage the rate is constant,
so each stage is filled in closed form:

    seconds_to_fill = (1 - progress) / rate

Whole stages are consumed while time remains; the leftover becomes partial
progress in the last stage reached.

Simplifications relative to the live sweep:
- Season fixed at summer (multiplier 1.0)
- No water bonus, and the result always reports watered=False
- No fertilizer, weather, structure or spatial species bonuses
- Elapsed time capped at 24 hours

The difficulty tier's growth scalar still applies. Under those same
conditions the live sweep, stepped in small ticks, converges to this result.
"""

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple

import jax.numpy as jnp
import numpy as np
from jax import Array

from grove.config import DEFAULT_CONFIG, MAX_STAGE, GrowthConfig
from grove.difficulty import NORMAL, DifficultyTier
from grove.growth import calc_growth_rate
from grove.species import DEFAULT_CATALOG, Species, SpeciesCatalog
from grove.state import Tree
from grove.world import Grove

logger = logging.getLogger(__name__)


class OfflineGrowthResult(NamedTuple):
    stage: int
    progress: float
    watered: bool = False  # Water evaporates while away
    growth_seconds: float = 0.0  # Offline time actually spent growing


def _clamp_result(
    stage: int, progress: float, config: GrowthConfig, growth_seconds: float = 0.0
) -> OfflineGrowthResult:
    stage = min(stage, MAX_STAGE)
    progress = min(progress, 1.0)
    if stage >= MAX_STAGE:
        progress = min(progress, config.terminal_progress_cap)
    return OfflineGrowthResult(
        stage=stage, progress=progress, watered=False, growth_seconds=growth_seconds
    )


def calculate_offline_growth(
    tree: Tree,
    elapsed_seconds: float,
    species: Species,
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> OfflineGrowthResult:
    """
    Growth of one tree over `elapsed_seconds` of absence.

    Args:
        tree: Tree state at the moment the player left (not mutated)
        elapsed_seconds: Real seconds away (clamped to [0, 24h])
        species: Species data for the tree
        difficulty: Active difficulty tier
        config: Engine configuration

    Returns:
        New (stage, progress) with watered=False, and the seconds consumed
        before the tree froze or reached Old Growth
    """
    elapsed = min(max(elapsed_seconds, 0.0), config.max_offline_seconds)
    remaining = elapsed
    stage = tree.stage
    progress = tree.progress

    if stage >= MAX_STAGE:
        return _clamp_result(stage, progress, config)

    while remaining > 0 and stage < MAX_STAGE:
        base_time = species.base_time(stage)
        if base_time is None or base_time <= 0:
            break

        rate = (
            calc_growth_rate(
                base_time,
                species.difficulty,
                config.offline_season,
                False,
                species.evergreen,
                species_id=species.id,
                config=config,
            )
            * difficulty.growth_speed_mult
        )
        if rate <= 0:
            break

        seconds_to_fill = (1.0 - progress) / rate

        if remaining >= seconds_to_fill:
            remaining -= seconds_to_fill
            stage += 1
            progress = 0.0
        else:
            progress += rate * remaining
            remaining = 0.0

    return _clamp_result(stage, progress, config, elapsed - remaining)


def calculate_all_offline_growth(
    trees: Sequence[Tree],
    elapsed_seconds: float,
    get_species: Callable[[str], Species | None],
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> list[OfflineGrowthResult]:
    """
    Offline growth for a list of trees, in input order.

    Trees whose species cannot be resolved keep their stage and progress
    (watered is still cleared).
    """
    results = []
    for tree in trees:
        species = get_species(tree.species_id)
        if species is None:
            logger.debug("Unknown species %r, skipped offline growth", tree.species_id)
            results.append(OfflineGrowthResult(tree.stage, tree.progress, False))
            continue
        results.append(
            calculate_offline_growth(tree, elapsed_seconds, species, difficulty, config)
        )
    return results


def apply_offline_growth(
    grove: Grove,
    elapsed_seconds: float,
    catalog: SpeciesCatalog = DEFAULT_CATALOG,
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> list[OfflineGrowthResult]:
    """
    Run offline catch-up over the grove and write results into its trees.

    Fertilizer is one-shot per stage, so it is cleared on trees that
    advanced. Offline growth time counts towards total_growth_time.
    """
    results = calculate_all_offline_growth(
        grove.trees, elapsed_seconds, catalog.get, difficulty, config
    )
    for tree, result in zip(grove.trees, results):
        if result.stage > tree.stage:
            tree.fertilized = False
        tree.stage = result.stage
        tree.progress = result.progress
        tree.watered = result.watered
        tree.total_growth_time += result.growth_seconds
    logger.info(
        "Applied %.0fs of offline growth to %d trees",
        min(max(elapsed_seconds, 0.0), config.max_offline_seconds),
        len(results),
    )
    return results


def base_time_table(species: Sequence[Species | None]) -> np.ndarray:
    """
    Pack per-tree base growth times into an (n, MAX_STAGE) array.

    Missing entries and unknown species become 0, which the vectorised
    integrator treats as "growth frozen at that stage".
    """
    table = np.zeros((len(species), MAX_STAGE), dtype=np.float32)
    for row, entry in enumerate(species):
        if entry is None:
            continue
        for stage in range(MAX_STAGE):
            base_time = entry.base_time(stage)
            if base_time is not None and base_time > 0:
                table[row, stage] = base_time
    return table


def offline_growth_arrays(
    stages: Array,
    progress: Array,
    base_times: Array,
    difficulty_divisors: Array,
    elapsed_seconds: float,
    growth_speed_mult: float = 1.0,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> tuple[Array, Array]:
    """
    Vectorised offline catch-up over a whole population.

    Same integrator as calculate_offline_growth, expressed with array
    masks so an entire save file advances in one call. Each pass either
    completes a stage or spends all remaining time, so MAX_STAGE passes
    always suffice.

    Args:
        stages: Integer stages, shape (n,)
        progress: Progress within the stage, shape (n,)
        base_times: Seconds per stage 0-3, shape (n, MAX_STAGE); <= 0 freezes
        difficulty_divisors: Species difficulty divisor per tree, shape (n,)
        elapsed_seconds: Real seconds away (clamped to [0, 24h])
        growth_speed_mult: Difficulty tier growth scalar
        config: Engine configuration

    Returns:
        Tuple of (stages, progress) arrays
    """
    stages, progress, _ = _offline_walk(
        stages,
        progress,
        base_times,
        difficulty_divisors,
        elapsed_seconds,
        growth_speed_mult,
        config,
    )
    return stages, progress


def _offline_walk(
    stages: Array,
    progress: Array,
    base_times: Array,
    difficulty_divisors: Array,
    elapsed_seconds: float,
    growth_speed_mult: float,
    config: GrowthConfig,
) -> tuple[Array, Array, Array]:
    """Array integrator; also returns the unspent seconds per tree."""
    stages = jnp.asarray(stages, dtype=jnp.int32)
    progress = jnp.asarray(progress, dtype=jnp.float32)
    base_times = jnp.asarray(base_times, dtype=jnp.float32)
    difficulty_divisors = jnp.asarray(difficulty_divisors, dtype=jnp.float32)

    elapsed = min(max(elapsed_seconds, 0.0), config.max_offline_seconds)
    remaining = jnp.full(stages.shape, elapsed, dtype=jnp.float32)
    season_mult = config.season_multiplier(config.offline_season)
    frozen = jnp.zeros(stages.shape, dtype=bool)

    for _ in range(MAX_STAGE):
        growing = (stages < MAX_STAGE) & (remaining > 0) & ~frozen

        column = jnp.clip(stages, 0, MAX_STAGE - 1)
        base = jnp.take_along_axis(base_times, column[:, None], axis=1)[:, 0]
        valid = (base > 0) & (difficulty_divisors > 0)
        safe_base = jnp.where(valid, base, 1.0)
        safe_divisor = jnp.where(valid, difficulty_divisors, 1.0)
        rate = season_mult * growth_speed_mult / (safe_base * safe_divisor)
        valid = valid & (rate > 0)

        frozen = frozen | (growing & ~valid)
        growing = growing & valid

        safe_rate = jnp.where(growing, rate, 1.0)
        seconds_to_fill = (1.0 - progress) / safe_rate
        completes = growing & (remaining >= seconds_to_fill)
        partial = growing & ~completes

        progress = jnp.where(
            completes, 0.0, jnp.where(partial, progress + rate * remaining, progress)
        )
        remaining = jnp.where(
            completes, remaining - seconds_to_fill, jnp.where(partial, 0.0, remaining)
        )
        stages = stages + completes.astype(jnp.int32)

    stages = jnp.minimum(stages, MAX_STAGE)
    progress = jnp.minimum(progress, 1.0)
    progress = jnp.where(
        stages >= MAX_STAGE,
        jnp.minimum(progress, config.terminal_progress_cap),
        progress,
    )
    return stages, progress, remaining


def offline_growth_batch(
    trees: Sequence[Tree],
    elapsed_seconds: float,
    catalog: SpeciesCatalog = DEFAULT_CATALOG,
    difficulty: DifficultyTier = NORMAL,
    config: GrowthConfig = DEFAULT_CONFIG,
) -> list[OfflineGrowthResult]:
    """Vectorised equivalent of calculate_all_offline_growth (float32)."""
    if not trees:
        return []

    species = [catalog.get(tree.species_id) for tree in trees]
    divisors = np.array(
        [
            config.difficulty_divisor(entry.difficulty) if entry is not None else 0.0
            for entry in species
        ],
        dtype=np.float32,
    )
    elapsed = min(max(elapsed_seconds, 0.0), config.max_offline_seconds)
    stages, progress, remaining = _offline_walk(
        stages=np.array([tree.stage for tree in trees], dtype=np.int32),
        progress=np.array([tree.progress for tree in trees], dtype=np.float32),
        base_times=base_time_table(species),
        difficulty_divisors=divisors,
        elapsed_seconds=elapsed_seconds,
        growth_speed_mult=difficulty.growth_speed_mult,
        config=config,
    )
    return [
        OfflineGrowthResult(int(stage), float(prog), False, elapsed - float(left))
        for stage, prog, left in zip(
            np.asarray(stages), np.asarray(progress), np.asarray(remaining)
        )
    ]
