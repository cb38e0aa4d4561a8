"""Tests for StatisticsEngine.

Tests cover:
- Per-category totals, completion rate and last completion date
- Current and longest streaks, with and without a through_day cutoff
- Category ordering of compute_habit_stats
- Snapshot projection of the current day
"""

from __future__ import annotations

from custom_components.rise_habits import const
from custom_components.rise_habits.engines.progress_engine import ProgressEngine
from custom_components.rise_habits.engines.statistics_engine import StatisticsEngine
from tests.helpers import complete_days, fresh_schedule, make_utc_dt


class TestCategoryStats:
    """Tests for compute_category_stats."""

    def test_empty_program(self) -> None:
        """A fresh program has zero totals and no last completion."""
        stats = StatisticsEngine.compute_category_stats(
            fresh_schedule(), const.CATEGORY_WATER
        )

        assert stats == {
            const.DATA_STATS_CATEGORY: const.CATEGORY_WATER,
            const.DATA_STATS_TOTAL_COMPLETED: 0,
            const.DATA_STATS_CURRENT_STREAK: 0,
            const.DATA_STATS_LONGEST_STREAK: 0,
            const.DATA_STATS_COMPLETION_RATE: 0.0,
            const.DATA_STATS_LAST_COMPLETED: None,
        }

    def test_streaks_over_a_gap(self) -> None:
        """Days 1, 2, 3, 5 completed: longest 3, current 1, last on day 5."""
        schedule = complete_days(fresh_schedule(), [1, 2, 3, 5])

        stats = StatisticsEngine.compute_category_stats(
            schedule[:5], const.CATEGORY_WATER
        )

        assert stats[const.DATA_STATS_TOTAL_COMPLETED] == 4
        assert stats[const.DATA_STATS_LONGEST_STREAK] == 3
        assert stats[const.DATA_STATS_CURRENT_STREAK] == 1
        assert stats[const.DATA_STATS_LAST_COMPLETED] == "2024-01-05"
        assert stats[const.DATA_STATS_COMPLETION_RATE] == 80.0

    def test_through_day_cuts_streaks_only(self) -> None:
        """As of day 4 the run is broken, while totals still cover the program."""
        schedule = complete_days(fresh_schedule(), [1, 2, 3, 5])

        stats = StatisticsEngine.compute_category_stats(
            schedule, const.CATEGORY_WATER, through_day=4
        )

        assert stats[const.DATA_STATS_CURRENT_STREAK] == 0
        assert stats[const.DATA_STATS_LONGEST_STREAK] == 3
        assert stats[const.DATA_STATS_LAST_COMPLETED] == "2024-01-03"
        assert stats[const.DATA_STATS_TOTAL_COMPLETED] == 4

    def test_full_program_forward_scan(self) -> None:
        """Over all 66 days the trailing run of empty days resets the current streak."""
        schedule = complete_days(fresh_schedule(), [1, 2, 3, 5])

        stats = StatisticsEngine.compute_category_stats(schedule, const.CATEGORY_WATER)

        assert stats[const.DATA_STATS_CURRENT_STREAK] == 0
        assert stats[const.DATA_STATS_COMPLETION_RATE] == 6.06

    def test_other_categories_do_not_count(self) -> None:
        """Completions in water never show up in sleep statistics."""
        schedule = complete_days(fresh_schedule(), [1, 2])

        stats = StatisticsEngine.compute_category_stats(schedule, const.CATEGORY_SLEEP)

        assert stats[const.DATA_STATS_TOTAL_COMPLETED] == 0
        assert stats[const.DATA_STATS_LONGEST_STREAK] == 0

    def test_rate_is_bounded(self) -> None:
        """Completing everything in a category gives exactly 100."""
        schedule = fresh_schedule()
        complete_days(schedule, list(range(1, 32)), const.CATEGORY_MIND)
        for day in range(32, 67):
            ProgressEngine.complete_task(
                schedule,  # type: ignore[arg-type]
                day,
                f"{const.CATEGORY_MIND}-{day}",
                make_utc_dt(2024, 3, 1),
            )

        stats = StatisticsEngine.compute_category_stats(schedule, const.CATEGORY_MIND)

        assert stats[const.DATA_STATS_COMPLETION_RATE] == 100.0
        assert stats[const.DATA_STATS_LONGEST_STREAK] == 66
        assert stats[const.DATA_STATS_CURRENT_STREAK] == 66


def test_habit_stats_follow_category_order() -> None:
    """compute_habit_stats returns one entry per habit category, in order."""
    stats = StatisticsEngine.compute_habit_stats(fresh_schedule())

    assert [item[const.DATA_STATS_CATEGORY] for item in stats] == list(
        const.HABIT_CATEGORIES
    )


class TestSnapshot:
    """Tests for build_snapshot."""

    def test_snapshot_of_current_day(self) -> None:
        """Counts come from the day entry, top tasks are the first incomplete titles."""
        schedule = complete_days(fresh_schedule(), [2], const.CATEGORY_SLEEP)

        snapshot = StatisticsEngine.build_snapshot(schedule, 2, top_n=2)

        assert snapshot[const.DATA_SNAPSHOT_CURRENT_DAY] == 2
        assert snapshot[const.DATA_SNAPSHOT_DATE] == "2024-01-02"
        assert snapshot[const.DATA_SNAPSHOT_COMPLETED_HABITS] == 1
        assert snapshot[const.DATA_SNAPSHOT_TOTAL_HABITS] == 6
        assert snapshot[const.DATA_SNAPSHOT_TOP_TASKS] == [
            schedule[1]["tasks"][1]["title"],
            schedule[1]["tasks"][2]["title"],
        ]

    def test_day_outside_program(self) -> None:
        """A cursor past day 66 yields an empty snapshot."""
        snapshot = StatisticsEngine.build_snapshot(fresh_schedule(), 70)

        assert snapshot == {
            const.DATA_SNAPSHOT_CURRENT_DAY: 70,
            const.DATA_SNAPSHOT_DATE: None,
            const.DATA_SNAPSHOT_COMPLETED_HABITS: 0,
            const.DATA_SNAPSHOT_TOTAL_HABITS: 0,
            const.DATA_SNAPSHOT_TOP_TASKS: [],
        }

    def test_zero_top_n(self) -> None:
        """top_n of zero lists no tasks."""
        snapshot = StatisticsEngine.build_snapshot(fresh_schedule(), 1, top_n=0)

        assert snapshot[const.DATA_SNAPSHOT_TOP_TASKS] == []
