# File: managers/progress_manager.py
"""Progress Manager for Rise Habits integration.

Records task completion on the stored schedule. Every operation loads the
whole schedule, mutates it through ProgressEngine, and persists it back under
the user's write lock, so two completions on the same schedule never lose an
update.

Signals Emitted:
- SIGNAL_SUFFIX_TASK_COMPLETED
- SIGNAL_SUFFIX_TASK_UNCOMPLETED
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..engines.progress_engine import ProgressEngine
from ..errors import DayNotFoundError
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..type_defs import DailyProgressData, UserScope


class ProgressManager(BaseManager):
    """Completes and uncompletes tasks on the persisted schedule."""

    async def async_setup(self) -> None:
        """Set up the progress manager (no subscriptions)."""

    async def _async_mutate_day(
        self,
        scope: UserScope,
        day: int,
        mutate: Callable[[list[DailyProgressData]], DailyProgressData],
    ) -> DailyProgressData:
        """Load the schedule, apply mutate, persist (takes the user lock).

        Raises:
            DayNotFoundError: No schedule exists, or the day is not in it
            TaskNotFoundError: Raised by mutate for an unknown task
            PersistenceError: The store rejected the write
        """
        key = self.user_key(const.STORE_KEY_SCHEDULE, scope)
        async with self.user_lock(scope):
            schedule = await self.store.async_get(key)
            if not isinstance(schedule, list):
                raise DayNotFoundError(day)
            entry = mutate(schedule)
            await self.store.async_set(key, schedule)
        return entry

    async def async_complete_task(
        self, scope: UserScope | None, day: int, task_id: str
    ) -> DailyProgressData:
        """Mark a task completed and return the updated day.

        Raises:
            NoActiveUserError: No user is resolved
            DayNotFoundError: The day is not in the schedule
            TaskNotFoundError: The task is not on that day
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        now = self.now()
        entry = await self._async_mutate_day(
            scope,
            day,
            lambda schedule: ProgressEngine.complete_task(schedule, day, task_id, now),
        )

        const.LOGGER.debug(
            "DEBUG: Completed task %s on day %s for '%s' (%s/%s, streak %s)",
            task_id,
            day,
            scope.handle,
            entry[const.DATA_DAY_COMPLETED_TASKS],
            entry[const.DATA_DAY_TOTAL_TASKS],
            entry[const.DATA_DAY_STREAK],
        )
        self.emit(
            const.SIGNAL_SUFFIX_TASK_COMPLETED,
            handle=scope.handle,
            day=day,
            task_id=task_id,
            streak=entry[const.DATA_DAY_STREAK],
        )
        return entry

    async def async_uncomplete_task(
        self, scope: UserScope | None, day: int, task_id: str
    ) -> DailyProgressData:
        """Clear a task's completion and return the updated day.

        The day's stored streak is not recomputed.

        Raises:
            NoActiveUserError: No user is resolved
            DayNotFoundError: The day is not in the schedule
            TaskNotFoundError: The task is not on that day
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        entry = await self._async_mutate_day(
            scope,
            day,
            lambda schedule: ProgressEngine.uncomplete_task(schedule, day, task_id),
        )

        const.LOGGER.debug(
            "DEBUG: Uncompleted task %s on day %s for '%s'", task_id, day, scope.handle
        )
        self.emit(
            const.SIGNAL_SUFFIX_TASK_UNCOMPLETED,
            handle=scope.handle,
            day=day,
            task_id=task_id,
        )
        return entry

    async def async_set_day_notes(
        self, scope: UserScope | None, day: int, notes: str | None
    ) -> DailyProgressData:
        """Set (or clear with an empty value) the notes of a day.

        Raises:
            NoActiveUserError: No user is resolved
            DayNotFoundError: The day is not in the schedule
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        entry = await self._async_mutate_day(
            scope,
            day,
            lambda schedule: ProgressEngine.set_notes(schedule, day, notes),
        )
        const.LOGGER.debug("DEBUG: Updated notes of day %s for '%s'", day, scope.handle)
        return entry
