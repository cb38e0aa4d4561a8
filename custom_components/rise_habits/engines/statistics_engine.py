"""Statistics Engine - Per-category habit statistics and the daily snapshot.

Reduces a schedule into lifetime statistics for each habit category:
- total completed tasks and completion rate
- current streak (trailing run of days with a completion in the category)
- longest streak ever reached
- date of the last day with a completion

Also projects a single day into the compact snapshot used by sensors.

Design Principles:
    - Stateless: operates only on the schedule passed in
    - Forward scan in day order; a day without a completion in the category
      breaks the current run
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import calculate_percentage

if TYPE_CHECKING:
    from ..type_defs import DailyProgressData, HabitStatsData, SnapshotData


class StatisticsEngine:
    """Stateless engine deriving habit statistics from a schedule."""

    @staticmethod
    def compute_category_stats(
        schedule: list[DailyProgressData],
        category: str,
        through_day: int | None = None,
    ) -> HabitStatsData:
        """Compute the statistics of one category.

        Args:
            schedule: Program days in day order
            category: Habit category to reduce
            through_day: When set, streak fields only consider days up to this
                day (last_completed too), i.e. the streak "as of" that day. Totals
                and completion rate always cover the whole program.

        Example:
            completions on days 1, 2, 3, 5 (of 5):
                through_day=None → current_streak 1, longest_streak 3
                through_day=4    → current_streak 0, longest_streak 3
        """
        total_completed = 0
        total_tasks = 0
        current_streak = 0
        longest_streak = 0
        last_completed: str | None = None

        for entry in schedule:
            day = entry.get(const.DATA_DAY, const.DEFAULT_ZERO)
            tasks = [
                task
                for task in entry.get(const.DATA_DAY_TASKS, [])
                if task.get(const.DATA_TASK_CATEGORY) == category
            ]
            completed = sum(1 for task in tasks if task.get(const.DATA_TASK_IS_COMPLETED))
            total_tasks += len(tasks)
            total_completed += completed

            if through_day is not None and day > through_day:
                continue

            if completed > 0:
                current_streak += 1
                longest_streak = max(longest_streak, current_streak)
                last_completed = entry.get(const.DATA_DAY_DATE)
            else:
                current_streak = 0

        return {
            const.DATA_STATS_CATEGORY: category,
            const.DATA_STATS_TOTAL_COMPLETED: total_completed,
            const.DATA_STATS_CURRENT_STREAK: current_streak,
            const.DATA_STATS_LONGEST_STREAK: longest_streak,
            const.DATA_STATS_COMPLETION_RATE: calculate_percentage(
                total_completed, total_tasks, const.DATA_FLOAT_PRECISION
            ),
            const.DATA_STATS_LAST_COMPLETED: last_completed,
        }  # type: ignore[return-value]

    @staticmethod
    def compute_habit_stats(
        schedule: list[DailyProgressData], through_day: int | None = None
    ) -> list[HabitStatsData]:
        """Compute statistics for every habit category, in category order."""
        return [
            StatisticsEngine.compute_category_stats(schedule, category, through_day)
            for category in const.HABIT_CATEGORIES
        ]

    @staticmethod
    def build_snapshot(
        schedule: list[DailyProgressData],
        current_day: int,
        top_n: int = const.DEFAULT_SNAPSHOT_TOP_N,
    ) -> SnapshotData:
        """Project the current day into a read-only snapshot.

        ``top_tasks`` holds the titles of the first ``top_n`` incomplete tasks
        in schedule order. A day outside the schedule yields zero counts.
        """
        entry = next(
            (item for item in schedule if item.get(const.DATA_DAY) == current_day),
            None,
        )
        if entry is None:
            return {
                const.DATA_SNAPSHOT_CURRENT_DAY: current_day,
                const.DATA_SNAPSHOT_DATE: None,
                const.DATA_SNAPSHOT_COMPLETED_HABITS: 0,
                const.DATA_SNAPSHOT_TOTAL_HABITS: 0,
                const.DATA_SNAPSHOT_TOP_TASKS: [],
            }  # type: ignore[return-value]

        incomplete = [
            task.get(const.DATA_TASK_TITLE, "")
            for task in entry.get(const.DATA_DAY_TASKS, [])
            if not task.get(const.DATA_TASK_IS_COMPLETED)
        ]
        return {
            const.DATA_SNAPSHOT_CURRENT_DAY: current_day,
            const.DATA_SNAPSHOT_DATE: entry.get(const.DATA_DAY_DATE),
            const.DATA_SNAPSHOT_COMPLETED_HABITS: entry.get(
                const.DATA_DAY_COMPLETED_TASKS, 0
            ),
            const.DATA_SNAPSHOT_TOTAL_HABITS: entry.get(const.DATA_DAY_TOTAL_TASKS, 0),
            const.DATA_SNAPSHOT_TOP_TASKS: incomplete[: max(top_n, 0)],
        }  # type: ignore[return-value]
