"""
Diagnostic plots of a headless run.

Stage and progress are combined into a single "lifecycle position"
(stage + progress), so a tree's whole life reads as one rising curve
that flattens in winter and stops just below 5 at Old Growth.
"""

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from grove.config import STAGE_NAMES
from grove.rollout import Trajectory


def lifecycle_curve(trajectory: Trajectory, tree_index: int = 0) -> list[float]:
    """stage + progress over time for one tree."""
    return [
        stage + prog
        for stage, prog in zip(
            trajectory.stages[tree_index], trajectory.progress[tree_index]
        )
    ]


def plot_trajectory(
    trajectory: Trajectory,
    tree_indices: list[int] | None = None,
    title: str = "Grove lifecycle",
    save_path: str | None = None,
) -> Figure:
    """
    Plot lifecycle position per tree and the harvest-ready count.

    Args:
        trajectory: Result of rollout.run_ticks
        tree_indices: Trees to draw (default: all)
        title: Figure title
        save_path: Optional path to save the figure

    Returns:
        The matplotlib Figure
    """
    if tree_indices is None:
        tree_indices = list(range(len(trajectory.stages)))

    fig, (ax_growth, ax_ready) = plt.subplots(
        2, 1, figsize=(10, 7), sharex=True, height_ratios=[3, 1]
    )

    for index in tree_indices:
        ax_growth.plot(
            trajectory.times,
            lifecycle_curve(trajectory, index),
            label=f"tree {index}",
            linewidth=1.5,
        )

    ax_growth.set_yticks(range(len(STAGE_NAMES)))
    ax_growth.set_yticklabels(STAGE_NAMES)
    ax_growth.set_ylim(0, len(STAGE_NAMES))
    ax_growth.set_ylabel("Stage")
    ax_growth.set_title(title)
    ax_growth.grid(True, alpha=0.3)
    if tree_indices:
        ax_growth.legend(loc="upper left", fontsize=8)

    ax_ready.step(trajectory.times[1:], trajectory.ready_counts, where="post")
    ax_ready.set_ylabel("Ready")
    ax_ready.set_xlabel("Seconds")
    ax_ready.grid(True, alpha=0.3)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
