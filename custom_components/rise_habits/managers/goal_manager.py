"""Goal manager for Rise Habits integration.

Handles CRUD operations for user goals stored under 'goals:{handle}'.
Goals are independent of the day schedule: questionnaire answers seed one
goal per habit category, and users can add custom goals on top.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
import uuid

from .. import const
from ..errors import GoalNotFoundError
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import GoalData, UserScope


# Fields a caller may change through update_goal
_UPDATABLE_FIELDS = (
    const.DATA_GOAL_TITLE,
    const.DATA_GOAL_DESCRIPTION,
    const.DATA_GOAL_CATEGORY,
    const.DATA_GOAL_VALUE,
    const.DATA_GOAL_TARGET,
    const.DATA_GOAL_IS_ACTIVE,
)


class GoalManager(BaseManager):
    """Manages goal create/update/delete/toggle with event signaling."""

    async def async_setup(self) -> None:
        """Set up the goal manager (no subscriptions)."""

    async def _async_read_goals(self, scope: UserScope) -> list[GoalData]:
        raw = await self.store.async_get(self.user_key(const.STORE_KEY_GOALS, scope))
        if not isinstance(raw, list):
            if raw is not None:
                const.LOGGER.warning(
                    "WARNING: Ignoring malformed goals for '%s'", scope.handle
                )
            return []
        return [goal for goal in raw if isinstance(goal, dict)]

    async def _async_write_goals(self, scope: UserScope, goals: list[GoalData]) -> None:
        await self.store.async_set(self.user_key(const.STORE_KEY_GOALS, scope), goals)

    @staticmethod
    def _find_index(goals: list[GoalData], goal_id: str) -> int:
        for index, goal in enumerate(goals):
            if goal.get(const.DATA_GOAL_ID) == goal_id:
                return index
        raise GoalNotFoundError(goal_id)

    async def async_get_goals(self, scope: UserScope | None) -> list[GoalData]:
        """Return the user's goals; an unknown user has none."""
        if scope is None:
            return []
        return await self._async_read_goals(scope)

    async def async_add_goal(
        self,
        scope: UserScope | None,
        *,
        title: str,
        category: str = const.CATEGORY_CUSTOM,
        description: str = "",
        value: str = "",
        target: str = "",
        is_active: bool = True,
    ) -> GoalData:
        """Create a goal and return it.

        Raises:
            NoActiveUserError: No user is resolved
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        now_iso = self.now().isoformat()
        goal: GoalData = {
            const.DATA_GOAL_ID: f"{const.GOAL_ID_PREFIX}{uuid.uuid4().hex}",
            const.DATA_GOAL_TITLE: title,
            const.DATA_GOAL_DESCRIPTION: description,
            const.DATA_GOAL_CATEGORY: category,
            const.DATA_GOAL_VALUE: value,
            const.DATA_GOAL_TARGET: target,
            const.DATA_GOAL_IS_ACTIVE: is_active,
            const.DATA_GOAL_CREATED_AT: now_iso,
            const.DATA_GOAL_UPDATED_AT: now_iso,
        }  # type: ignore[typeddict-item]

        async with self.user_lock(scope):
            goals = await self._async_read_goals(scope)
            goals.append(goal)
            await self._async_write_goals(scope, goals)

        const.LOGGER.info(
            "INFO: Created goal '%s' (ID: %s) for '%s'",
            title,
            goal[const.DATA_GOAL_ID],
            scope.handle,
        )
        self.emit(
            const.SIGNAL_SUFFIX_GOALS_CHANGED,
            handle=scope.handle,
            goal_id=goal[const.DATA_GOAL_ID],
            action="added",
        )
        return goal

    async def async_update_goal(
        self, scope: UserScope | None, goal_id: str, updates: dict[str, Any]
    ) -> GoalData:
        """Apply field updates to a goal and stamp updated_at.

        Unknown fields are ignored; id and created_at cannot be changed.

        Raises:
            NoActiveUserError: No user is resolved
            GoalNotFoundError: goal_id does not exist
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            goals = await self._async_read_goals(scope)
            goal = goals[self._find_index(goals, goal_id)]
            for field in _UPDATABLE_FIELDS:
                if field in updates and updates[field] is not None:
                    goal[field] = updates[field]
            goal[const.DATA_GOAL_UPDATED_AT] = self.now().isoformat()
            await self._async_write_goals(scope, goals)

        const.LOGGER.debug("DEBUG: Updated goal %s for '%s'", goal_id, scope.handle)
        self.emit(
            const.SIGNAL_SUFFIX_GOALS_CHANGED,
            handle=scope.handle,
            goal_id=goal_id,
            action="updated",
        )
        return goal

    async def async_delete_goal(self, scope: UserScope | None, goal_id: str) -> None:
        """Delete a goal.

        Raises:
            NoActiveUserError: No user is resolved
            GoalNotFoundError: goal_id does not exist
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            goals = await self._async_read_goals(scope)
            goals.pop(self._find_index(goals, goal_id))
            await self._async_write_goals(scope, goals)

        const.LOGGER.info("INFO: Deleted goal %s for '%s'", goal_id, scope.handle)
        self.emit(
            const.SIGNAL_SUFFIX_GOALS_CHANGED,
            handle=scope.handle,
            goal_id=goal_id,
            action="deleted",
        )

    async def async_toggle_goal(self, scope: UserScope | None, goal_id: str) -> GoalData:
        """Flip a goal's active flag and return the updated goal."""
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            goals = await self._async_read_goals(scope)
            goal = goals[self._find_index(goals, goal_id)]
            goal[const.DATA_GOAL_IS_ACTIVE] = not goal.get(
                const.DATA_GOAL_IS_ACTIVE, False
            )
            goal[const.DATA_GOAL_UPDATED_AT] = self.now().isoformat()
            await self._async_write_goals(scope, goals)

        self.emit(
            const.SIGNAL_SUFFIX_GOALS_CHANGED,
            handle=scope.handle,
            goal_id=goal_id,
            action="toggled",
        )
        return goal

    async def async_build_merged_goals(
        self, scope: UserScope, incoming: list[GoalData]
    ) -> list[GoalData]:
        """Return the stored goals upserted by id (caller holds the user lock).

        An existing goal keeps its position and created_at; every other field
        comes from the incoming record. Goals not in ``incoming`` are kept.
        Nothing is written; the caller persists the result.
        """
        goals = await self._async_read_goals(scope)
        positions = {goal.get(const.DATA_GOAL_ID): i for i, goal in enumerate(goals)}
        for goal in incoming:
            index = positions.get(goal[const.DATA_GOAL_ID])
            if index is None:
                positions[goal[const.DATA_GOAL_ID]] = len(goals)
                goals.append(goal)
            else:
                merged = dict(goal)
                merged[const.DATA_GOAL_CREATED_AT] = goals[index].get(
                    const.DATA_GOAL_CREATED_AT, goal[const.DATA_GOAL_CREATED_AT]
                )
                goals[index] = merged  # type: ignore[assignment]
        return goals
