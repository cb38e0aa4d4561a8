# File: errors.py
"""Exceptions raised by the Rise Habits engines and managers.

All errors subclass HomeAssistantError so a failing service call surfaces the
message to the caller (UI, script or automation) without extra translation.
"""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError

from . import const


class RiseHabitsError(HomeAssistantError):
    """Base class for Rise Habits errors."""


class NoActiveUserError(RiseHabitsError):
    """Raised when a per-user operation runs without a resolved user."""

    def __init__(self) -> None:
        """Initialize NoActiveUserError."""
        super().__init__(const.ERROR_NO_ACTIVE_USER)


class DayNotFoundError(RiseHabitsError):
    """Raised when a day number is not present in the schedule.

    Attributes:
        day: The requested 1-based program day
    """

    def __init__(self, day: int) -> None:
        """Initialize DayNotFoundError."""
        self.day = day
        super().__init__(const.ERROR_DAY_NOT_FOUND_FMT.format(day))


class TaskNotFoundError(RiseHabitsError):
    """Raised when a task id is not present on the requested day.

    Attributes:
        day: The program day that was searched
        task_id: The missing task id
    """

    def __init__(self, day: int, task_id: str) -> None:
        """Initialize TaskNotFoundError."""
        self.day = day
        self.task_id = task_id
        super().__init__(const.ERROR_TASK_NOT_FOUND_FMT.format(task_id, day))


class GoalNotFoundError(RiseHabitsError):
    """Raised when a goal id does not exist for the user."""

    def __init__(self, goal_id: str) -> None:
        """Initialize GoalNotFoundError."""
        self.goal_id = goal_id
        super().__init__(const.ERROR_GOAL_NOT_FOUND_FMT.format(goal_id))


class PersistenceError(RiseHabitsError):
    """Raised when the store rejects a write.

    Attributes:
        key: The storage key that could not be written
    """

    def __init__(self, key: str) -> None:
        """Initialize PersistenceError."""
        self.key = key
        super().__init__(const.ERROR_PERSISTENCE_FMT.format(key))
