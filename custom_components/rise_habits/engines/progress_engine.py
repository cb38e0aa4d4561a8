"""Progress Engine - Pure logic for task completion and day streaks.

Mutates a schedule (list of DailyProgress dicts) in place:
- complete / uncomplete a task on a given day
- keep ``completed_tasks`` equal to the number of completed tasks
- recompute the day streak by walking backward over the schedule

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
The caller owns the schedule copy and is responsible for persisting it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..errors import DayNotFoundError, TaskNotFoundError

if TYPE_CHECKING:
    from datetime import datetime

    from ..type_defs import DailyProgressData, TaskData


class ProgressEngine:
    """Pure logic engine for completion bookkeeping.

    All methods are static - no instance state.
    """

    @staticmethod
    def find_day_index(schedule: list[DailyProgressData], day: int) -> int:
        """Return the list index of a day entry, or raise DayNotFoundError."""
        for index, entry in enumerate(schedule):
            if entry.get(const.DATA_DAY) == day:
                return index
        raise DayNotFoundError(day)

    @staticmethod
    def find_task(entry: DailyProgressData, task_id: str) -> TaskData:
        """Return the task with the given id on a day, or raise TaskNotFoundError."""
        for task in entry.get(const.DATA_DAY_TASKS, []):
            if task.get(const.DATA_TASK_ID) == task_id:
                return task
        raise TaskNotFoundError(entry.get(const.DATA_DAY, const.DEFAULT_ZERO), task_id)

    @staticmethod
    def count_completed(entry: DailyProgressData) -> int:
        """Count completed tasks on one day."""
        return sum(
            1
            for task in entry.get(const.DATA_DAY_TASKS, [])
            if task.get(const.DATA_TASK_IS_COMPLETED)
        )

    @staticmethod
    def calculate_streak(schedule: list[DailyProgressData], index: int) -> int:
        """Count consecutive days with at least one completion ending at index.

        The walk goes backward by list position and stops at the first day
        with ``completed_tasks == 0``. The day at ``index`` is included, so a
        day with no completion yields 0.

        Example:
            completed_tasks by day: [1, 2, 0, 3, 1]
            calculate_streak(schedule, 4) → 2
            calculate_streak(schedule, 2) → 0
        """
        streak = 0
        for position in range(index, -1, -1):
            if schedule[position].get(const.DATA_DAY_COMPLETED_TASKS, 0) > 0:
                streak += 1
            else:
                break
        return streak

    @staticmethod
    def complete_task(
        schedule: list[DailyProgressData],
        day: int,
        task_id: str,
        now: datetime,
    ) -> DailyProgressData:
        """Mark a task completed and refresh that day's counts and streak.

        Completing an already completed task refreshes ``completed_at`` and
        leaves the counts unchanged.

        Raises:
            DayNotFoundError: day is not in the schedule
            TaskNotFoundError: task_id is not on that day
        """
        index = ProgressEngine.find_day_index(schedule, day)
        entry = schedule[index]
        task = ProgressEngine.find_task(entry, task_id)

        task[const.DATA_TASK_IS_COMPLETED] = True
        task[const.DATA_TASK_COMPLETED_AT] = now.isoformat()

        entry[const.DATA_DAY_COMPLETED_TASKS] = ProgressEngine.count_completed(entry)
        entry[const.DATA_DAY_STREAK] = ProgressEngine.calculate_streak(schedule, index)
        return entry

    @staticmethod
    def uncomplete_task(
        schedule: list[DailyProgressData],
        day: int,
        task_id: str,
    ) -> DailyProgressData:
        """Clear a task's completion and refresh that day's completed count.

        The stored streak is left as is; it is only recomputed on completion.

        Raises:
            DayNotFoundError: day is not in the schedule
            TaskNotFoundError: task_id is not on that day
        """
        index = ProgressEngine.find_day_index(schedule, day)
        entry = schedule[index]
        task = ProgressEngine.find_task(entry, task_id)

        task[const.DATA_TASK_IS_COMPLETED] = False
        task.pop(const.DATA_TASK_COMPLETED_AT, None)

        entry[const.DATA_DAY_COMPLETED_TASKS] = ProgressEngine.count_completed(entry)
        return entry

    @staticmethod
    def set_notes(
        schedule: list[DailyProgressData], day: int, notes: str | None
    ) -> DailyProgressData:
        """Set or clear the free-text notes of a day.

        Raises:
            DayNotFoundError: day is not in the schedule
        """
        entry = schedule[ProgressEngine.find_day_index(schedule, day)]
        if notes:
            entry[const.DATA_DAY_NOTES] = notes
        else:
            entry.pop(const.DATA_DAY_NOTES, None)
        return entry
