# File: coordinator.py
"""Coordinator for the Rise Habits integration.

Owns the key-value store, the resolved user scope, the per-user write locks
and the managers. The periodic refresh rebuilds the read-only payload
(current day, snapshot, stats) that the sensor platform renders.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from . import const
from .managers import (
    DayProgressionManager,
    GoalManager,
    ProgramManager,
    ProgressManager,
    StatisticsManager,
)
from .rh_helpers import resolve_user_scope

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .store import RiseHabitsStore
    from .type_defs import UserScope


class RiseHabitsDataCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for Rise Habits integration.

    One coordinator exists per config entry, i.e. per user handle.
    """

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: RiseHabitsStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the RiseHabitsDataCoordinator."""
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.store = store
        self.clock: Callable[[], datetime] = clock or dt_util.utcnow
        self._user_locks: dict[str, asyncio.Lock] = {}

        # Managers (order matters only for async_setup_managers)
        self.goal_manager = GoalManager(hass, self)
        self.day_progression_manager = DayProgressionManager(hass, self)
        self.program_manager = ProgramManager(hass, self)
        self.progress_manager = ProgressManager(hass, self)
        self.statistics_manager = StatisticsManager(hass, self)

    # -------------------------------------------------------------------------------------
    # User scope and locking
    # -------------------------------------------------------------------------------------

    @property
    def user_scope(self) -> UserScope | None:
        """Return the user owning this entry's program."""
        return resolve_user_scope(self.config_entry.data)

    def get_user_lock(self, scope: UserScope) -> asyncio.Lock:
        """Return the lock serializing read-modify-persist cycles of one user."""
        lock = self._user_locks.get(scope.handle)
        if lock is None:
            lock = self._user_locks[scope.handle] = asyncio.Lock()
        return lock

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    async def async_setup_managers(self) -> None:
        """Run every manager's async_setup once."""
        for manager in (
            self.goal_manager,
            self.day_progression_manager,
            self.program_manager,
            self.progress_manager,
            self.statistics_manager,
        ):
            await manager.async_setup()
        const.LOGGER.debug(
            "DEBUG: Managers initialized for entry %s", self.config_entry.entry_id
        )

    async def _async_update_data(self) -> dict[str, Any]:
        """Periodic update."""
        try:
            return await self.statistics_manager.async_build_coordinator_data(
                self.user_scope
            )
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise UpdateFailed(f"Error updating Rise Habits data: {err}") from err
