"""
Tests for the headless tick loop and its diagnostics.

These tests verify that a rollout records a consistent trajectory, promotes
mature trees to harvest tracking, and collects yields when asked.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from grove import rollout
from grove.difficulty import EXPLORE
from grove.world import Grove


def make_grove() -> Grove:
    grove = Grove()
    grove.plant("white-oak", x=0, z=0)
    grove.plant("elder-pine", x=5, z=0)
    return grove


class TestSeasonClock:
    """Tests for the season schedule."""

    def test_cycles_through_seasons(self) -> None:
        """Seasons advance every season_length seconds and wrap."""
        clock = rollout.SeasonClock(season_length=10)
        assert [clock(t) for t in (0, 9.9, 10, 25, 35, 40)] == [
            "spring",
            "spring",
            "summer",
            "autumn",
            "winter",
            "spring",
        ]

    def test_start_offset(self) -> None:
        """A clock can start mid-year."""
        clock = rollout.SeasonClock(season_length=10, start="winter")
        assert clock(0) == "winter"
        assert clock(10) == "spring"

    def test_invalid_clock(self) -> None:
        """Bad lengths and season names are rejected."""
        with pytest.raises(ValueError):
            rollout.SeasonClock(season_length=0)
        with pytest.raises(ValueError):
            rollout.SeasonClock(season_length=10, start="monsoon")


class TestRunTicks:
    """Tests for the tick loop."""

    def test_trajectory_lengths(self) -> None:
        """Histories include the initial state plus one entry per tick."""
        grove = make_grove()
        trajectory = rollout.run_ticks(grove, num_ticks=20, delta_time=0.5)

        assert len(trajectory.times) == 21
        assert len(trajectory.seasons) == 20
        assert len(trajectory.ready_counts) == 20
        assert all(len(h) == 21 for h in trajectory.stages)
        assert all(len(h) == 21 for h in trajectory.progress)
        assert trajectory.times[-1] == pytest.approx(10.0)

    def test_stages_monotone(self) -> None:
        """Recorded stages never decrease."""
        trajectory = rollout.run_ticks(make_grove(), num_ticks=400, delta_time=0.5)
        for history in trajectory.stages:
            assert history == sorted(history)

    def test_mature_trees_promoted(self) -> None:
        """Trees reaching Mature get a harvestable facet."""
        grove = make_grove()
        rollout.run_ticks(grove, num_ticks=100, delta_time=1.0)
        oak = grove.trees[0]
        assert oak.stage >= 3
        assert oak.harvestable is not None

    def test_collection_fills_ledger(self) -> None:
        """With collection on, ready harvests are banked."""
        grove = make_grove()
        trajectory = rollout.run_ticks(
            grove, num_ticks=300, delta_time=1.0, collect=True
        )
        assert trajectory.harvested.get("timber", 0) > 0
        assert all(not tree.is_ready for tree in grove.trees)

    def test_without_collection_trees_stay_ready(self) -> None:
        """Readiness persists until something collects."""
        grove = make_grove()
        trajectory = rollout.run_ticks(grove, num_ticks=300, delta_time=1.0)
        assert trajectory.harvested == {}
        assert trajectory.ready_counts[-1] == 2

    def test_season_function(self) -> None:
        """A season schedule is evaluated per tick."""
        clock = rollout.SeasonClock(season_length=5)
        trajectory = rollout.run_ticks(make_grove(), 20, 1.0, season=clock)
        assert trajectory.seasons[:6] == ["spring"] * 5 + ["summer"]
        assert trajectory.seasons[-1] == "winter"

    def test_difficulty_speeds_rollout(self) -> None:
        """Explore reaches further along the lifecycle than normal."""
        normal = rollout.run_ticks(make_grove(), 30, 0.5)
        explore = rollout.run_ticks(make_grove(), 30, 0.5, difficulty=EXPLORE)
        assert (
            explore.stages[0][-1] + explore.progress[0][-1]
            > normal.stages[0][-1] + normal.progress[0][-1]
        )


class TestTrajectorySummary:
    """Tests for diagnostics output."""

    def test_scalar_summary(self) -> None:
        """Summary reports population and harvest totals."""
        trajectory = rollout.run_ticks(make_grove(), 300, 1.0, collect=True)
        summary = trajectory.get_scalar_summary()
        assert summary["Ticks"] == 300
        assert summary["Trees"] == 2
        assert summary["Mature"] == 2
        assert summary["Harvested"] == sum(trajectory.harvested.values())

    def test_print_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The summary table prints without error."""
        trajectory = rollout.run_ticks(make_grove(), 10, 1.0)
        trajectory.print_summary()
        assert "GROVE SUMMARY" in capsys.readouterr().out

    def test_plot_trajectory(self, tmp_path) -> None:
        """A lifecycle plot is drawn and saved."""
        from grove.visualization import lifecycle_curve, plot_trajectory

        trajectory = rollout.run_ticks(make_grove(), 50, 1.0)
        path = tmp_path / "grove.png"
        fig = plot_trajectory(trajectory, save_path=str(path))

        assert path.exists()
        assert len(fig.axes) == 2
        curve = lifecycle_curve(trajectory, 0)
        assert curve == sorted(curve)
        assert curve[-1] < 5

    def test_plot_selected_trees(self) -> None:
        """Only the requested trees are drawn."""
        from grove.visualization import plot_trajectory

        trajectory = rollout.run_ticks(make_grove(), 20, 1.0)
        fig = plot_trajectory(trajectory, tree_indices=[1], title="Pine only")

        ax_growth = fig.axes[0]
        assert len(ax_growth.lines) == 1
        assert ax_growth.get_title() == "Pine only"
