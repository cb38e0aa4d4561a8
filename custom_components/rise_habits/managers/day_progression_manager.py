# File: managers/day_progression_manager.py
"""Day Progression Manager for Rise Habits integration.

The "Monitor" - advances the per-user program day once per calendar day.

Responsibilities:
- Load/persist the day cursor stored under 'dayProgression:{handle}'
- Poll the clock on a fixed interval and detect local-date crossings
- Manual advance and reset for testing and recovery
- Track the transient "new day" flag until the UI acknowledges it

Signals Emitted:
- SIGNAL_SUFFIX_NEW_DAY: A check or manual advance moved the cursor
- SIGNAL_SUFFIX_DAY_RESET: The cursor was reset to day 1
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.helpers.event import async_track_time_interval

from .. import const
from ..engines.day_progression_engine import DayProgressionEngine
from ..errors import PersistenceError
from ..utils import dt_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from zoneinfo import ZoneInfo

    from homeassistant.core import CALLBACK_TYPE, HomeAssistant

    from ..coordinator import RiseHabitsDataCoordinator
    from ..type_defs import DayCheckResult, DayProgressionData, UserScope


class DayProgressionManager(BaseManager):
    """Owns the day cursor and the polling timer.

    The clock and timezone are injectable so tests can drive calendar
    crossings deterministically. Without overrides the coordinator clock and
    the Home Assistant timezone are used.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: RiseHabitsDataCoordinator,
        *,
        clock: Callable[[], datetime] | None = None,
        tz: ZoneInfo | None = None,
        check_interval: timedelta | None = None,
    ) -> None:
        """Initialize day progression manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator
            clock: Returns the current UTC datetime (defaults to coordinator clock)
            tz: Timezone defining calendar days (defaults to the HA timezone)
            check_interval: Polling period (defaults to the configured option)
        """
        super().__init__(hass, coordinator)
        self._clock = clock
        self._tz = tz
        if check_interval is None:
            check_interval = timedelta(
                minutes=coordinator.config_entry.options.get(
                    const.CONF_DAY_CHECK_INTERVAL, const.DEFAULT_DAY_CHECK_INTERVAL
                )
            )
        self._check_interval = check_interval
        self._unsub_timer: CALLBACK_TYPE | None = None
        self._is_new_day = False
        self._last_known_day = const.FIRST_PROGRAM_DAY

    async def async_setup(self) -> None:
        """Set up the manager.

        A generated or cleared program puts the cursor back on day 1 and drops
        any pending "new day" flag. The timer itself is started by the
        integration after platforms are ready.
        """
        self.listen(const.SIGNAL_SUFFIX_PROGRAM_GENERATED, self._on_program_reset)
        self.listen(const.SIGNAL_SUFFIX_PROGRAM_CLEARED, self._on_program_reset)
        self.coordinator.config_entry.async_on_unload(self.async_stop)

    @callback
    def _on_program_reset(self, payload: dict[str, Any]) -> None:
        self._is_new_day = False
        self._last_known_day = const.FIRST_PROGRAM_DAY

    # ------------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------------

    def now(self) -> datetime:
        """Read the injected clock, falling back to the coordinator clock."""
        if self._clock is not None:
            return self._clock()
        return super().now()

    @property
    def tz(self) -> ZoneInfo:
        """Timezone used to compare calendar days."""
        return self._tz or dt_utils.get_default_timezone()

    @property
    def is_running(self) -> bool:
        """Return True while the polling timer is scheduled."""
        return self._unsub_timer is not None

    @property
    def is_new_day(self) -> bool:
        """Return True after a crossing until acknowledged or the next quiet check."""
        return self._is_new_day

    @property
    def current_day(self) -> int:
        """Return the last day number seen by this manager."""
        return self._last_known_day

    def acknowledge_new_day(self) -> None:
        """Clear the "new day" flag once the UI has reacted to it."""
        self._is_new_day = False

    # ------------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------------

    async def _async_read_state(
        self, scope: UserScope, now: datetime
    ) -> DayProgressionData:
        """Read and normalize the state (caller holds the user lock).

        A user without stored state gets the default state persisted. Failures
        fall back to the default without raising.
        """
        key = self.user_key(const.STORE_KEY_DAY_PROGRESSION, scope)
        raw = await self.store.async_get(key)
        if raw is not None:
            return DayProgressionEngine.normalize_state(raw, now)

        state = DayProgressionEngine.default_state(now)
        try:
            await self.store.async_set(key, state)
            const.LOGGER.debug(
                "DEBUG: Initialized day progression for '%s' at day %s",
                scope.handle,
                state[const.DATA_PROGRESSION_CURRENT_DAY],
            )
        except PersistenceError as err:
            const.LOGGER.warning(
                "WARNING: Could not persist initial day progression for '%s': %s",
                scope.handle,
                err,
            )
        return state

    async def async_write_state(
        self, scope: UserScope, state: DayProgressionData
    ) -> None:
        """Persist a state (caller holds the user lock).

        Raises:
            PersistenceError: The store rejected the write
        """
        await self.store.async_set(
            self.user_key(const.STORE_KEY_DAY_PROGRESSION, scope), state
        )
        self._last_known_day = state[const.DATA_PROGRESSION_CURRENT_DAY]

    async def async_load_state(self, scope: UserScope | None) -> DayProgressionData:
        """Return the user's day cursor, or the default state when unavailable."""
        now = self.now()
        if scope is None:
            return DayProgressionEngine.default_state(now)
        async with self.user_lock(scope):
            state = await self._async_read_state(scope, now)
        self._last_known_day = state[const.DATA_PROGRESSION_CURRENT_DAY]
        return state

    # ------------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------------

    async def async_check_new_day(self, scope: UserScope | None) -> DayCheckResult:
        """Run one boundary check and advance the day on a crossing.

        Never raises: without a user the result is ``{False, 1}``; any failure
        is logged and reported as no crossing at the last known day.
        """
        if scope is None:
            return {
                const.DATA_PROGRESSION_IS_NEW_DAY: False,
                const.DATA_PROGRESSION_CURRENT_DAY: const.FIRST_PROGRAM_DAY,
            }

        try:
            async with self.user_lock(scope):
                now = self.now()
                state = await self._async_read_state(scope, now)
                new_state, is_new_day = DayProgressionEngine.check_new_day(
                    state, now, self.tz
                )
                if is_new_day:
                    await self.async_write_state(scope, new_state)
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.warning(
                "WARNING: Day check failed for '%s': %s", scope.handle, err
            )
            return {
                const.DATA_PROGRESSION_IS_NEW_DAY: False,
                const.DATA_PROGRESSION_CURRENT_DAY: self._last_known_day,
            }

        current_day = new_state[const.DATA_PROGRESSION_CURRENT_DAY]
        flag_cleared = self._is_new_day and not is_new_day
        self._last_known_day = current_day
        self._is_new_day = is_new_day

        if is_new_day:
            const.LOGGER.info(
                "INFO: New day detected for '%s': advanced to day %s",
                scope.handle,
                current_day,
            )
            self.emit(
                const.SIGNAL_SUFFIX_NEW_DAY,
                handle=scope.handle,
                current_day=current_day,
            )
            await self.coordinator.async_request_refresh()
        else:
            const.LOGGER.debug(
                "DEBUG: No day change for '%s' (day %s)", scope.handle, current_day
            )
            if flag_cleared:
                await self.coordinator.async_request_refresh()

        return {
            const.DATA_PROGRESSION_IS_NEW_DAY: is_new_day,
            const.DATA_PROGRESSION_CURRENT_DAY: current_day,
        }

    async def async_advance_to_next_day(
        self, scope: UserScope | None
    ) -> DayProgressionData:
        """Advance the cursor by one day regardless of the calendar.

        Raises:
            NoActiveUserError: No user is resolved
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            now = self.now()
            state = await self._async_read_state(scope, now)
            new_state = DayProgressionEngine.advance(state, now)
            await self.async_write_state(scope, new_state)

        self._is_new_day = True
        current_day = new_state[const.DATA_PROGRESSION_CURRENT_DAY]
        const.LOGGER.info(
            "INFO: Manually advanced '%s' to day %s", scope.handle, current_day
        )
        self.emit(
            const.SIGNAL_SUFFIX_NEW_DAY, handle=scope.handle, current_day=current_day
        )
        return new_state

    async def async_reset(self, scope: UserScope | None) -> DayProgressionData:
        """Reset the cursor to day 1 anchored at the current time.

        Raises:
            NoActiveUserError: No user is resolved
            PersistenceError: The store rejected the write
        """
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            new_state = DayProgressionEngine.reset(self.now())
            await self.async_write_state(scope, new_state)

        self._is_new_day = False
        const.LOGGER.info("INFO: Day progression reset to day 1 for '%s'", scope.handle)
        self.emit(const.SIGNAL_SUFFIX_DAY_RESET, handle=scope.handle)
        return new_state

    # ------------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------------

    async def async_start(self) -> None:
        """Start polling: one check now, then one per interval. Idempotent."""
        if self.is_running:
            return
        self._unsub_timer = async_track_time_interval(
            self.hass, self._async_on_tick, self._check_interval
        )
        const.LOGGER.debug(
            "DEBUG: Day monitor started for instance %s (interval %s)",
            self.entry_id,
            self._check_interval,
        )
        await self._async_on_tick(self.now())

    async def async_stop(self) -> None:
        """Cancel future checks. Persisted state is left untouched. Idempotent."""
        if self._unsub_timer is None:
            return
        self._unsub_timer()
        self._unsub_timer = None
        const.LOGGER.debug("DEBUG: Day monitor stopped for instance %s", self.entry_id)

    async def _async_on_tick(self, _: datetime) -> None:
        """Handle one timer tick; exceptions are logged and never escape."""
        try:
            await self.async_check_new_day(self.coordinator.user_scope)
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.error("ERROR: Day monitor tick failed: %s", err)
