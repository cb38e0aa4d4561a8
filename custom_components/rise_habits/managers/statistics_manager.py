# File: managers/statistics_manager.py
"""Statistics Manager for Rise Habits integration.

Read-only aggregation over the stored schedule: per-category habit stats,
the current-day snapshot, and the payload the coordinator hands to sensors
(which also carries the goals and questionnaire answers).
Nothing here writes to the store except the first-load default of the day
cursor, which goes through DayProgressionManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.statistics_engine import StatisticsEngine
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import HabitStatsData, SnapshotData, UserScope


class StatisticsManager(BaseManager):
    """Derives statistics and snapshots from the persisted program."""

    async def async_setup(self) -> None:
        """Set up the statistics manager (no subscriptions)."""

    @property
    def top_n(self) -> int:
        """Number of incomplete task titles exposed in the snapshot."""
        return int(
            self.coordinator.config_entry.options.get(
                const.CONF_SNAPSHOT_TOP_N, const.DEFAULT_SNAPSHOT_TOP_N
            )
        )

    async def async_compute_stats(
        self, scope: UserScope | None, through_day: int | None = None
    ) -> list[HabitStatsData]:
        """Return per-category stats; no user or no schedule yields zeroed stats."""
        schedule = await self.coordinator.program_manager.async_get_schedule(scope)
        return StatisticsEngine.compute_habit_stats(schedule or [], through_day)

    async def async_get_snapshot(self, scope: UserScope | None) -> SnapshotData:
        """Return the snapshot of the user's current program day."""
        state = await self.coordinator.day_progression_manager.async_load_state(scope)
        schedule = await self.coordinator.program_manager.async_get_schedule(scope)
        return StatisticsEngine.build_snapshot(
            schedule or [],
            state[const.DATA_PROGRESSION_CURRENT_DAY],
            self.top_n,
        )

    async def async_build_coordinator_data(
        self, scope: UserScope | None
    ) -> dict[str, Any]:
        """Build the payload shared by all sensors of this entry.

        Streaks are computed as of the current day so a future, not yet
        reachable day never counts as a break.
        """
        state = await self.coordinator.day_progression_manager.async_load_state(scope)
        current_day = state[const.DATA_PROGRESSION_CURRENT_DAY]
        schedule = await self.coordinator.program_manager.async_get_schedule(scope)

        stats = StatisticsEngine.compute_habit_stats(schedule or [], current_day)
        goals = await self.coordinator.goal_manager.async_get_goals(scope)
        questionnaire = await self.coordinator.program_manager.async_get_questionnaire(
            scope
        )
        return {
            const.DATA_COORD_PROGRAM_GENERATED: bool(schedule),
            const.DATA_COORD_CURRENT_DAY: current_day,
            const.DATA_COORD_SNAPSHOT: StatisticsEngine.build_snapshot(
                schedule or [], current_day, self.top_n
            ),
            const.DATA_COORD_STATS: {
                item[const.DATA_STATS_CATEGORY]: item for item in stats
            },
            const.DATA_COORD_GOALS: goals,
            const.DATA_COORD_ACTIVE_GOALS: sum(
                1 for goal in goals if goal.get(const.DATA_GOAL_IS_ACTIVE)
            ),
            const.DATA_COORD_QUESTIONNAIRE: questionnaire,
        }
