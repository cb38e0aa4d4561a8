"""Tests for DayProgressionManager.

Drives the injected FakeClock across calendar boundaries and checks the
persisted cursor, emitted signals and timer lifecycle.
"""

# pylint: disable=protected-access
# pylint: disable=redefined-outer-name

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from homeassistant.core import HomeAssistant

from custom_components.rise_habits import const
from custom_components.rise_habits.coordinator import RiseHabitsDataCoordinator
from custom_components.rise_habits.errors import NoActiveUserError
from custom_components.rise_habits.managers import DayProgressionManager
from custom_components.rise_habits.type_defs import UserScope
from tests.helpers import FakeClock, capture_signal, make_utc_dt

TIMER_PATH = (
    "custom_components.rise_habits.managers.day_progression_manager"
    ".async_track_time_interval"
)


@pytest.fixture
def monitor(coordinator: RiseHabitsDataCoordinator) -> DayProgressionManager:
    """Return the coordinator's day progression manager."""
    return coordinator.day_progression_manager


async def _stored_state(coordinator: RiseHabitsDataCoordinator, scope: UserScope):
    return await coordinator.store.async_get(
        f"{const.STORE_KEY_DAY_PROGRESSION}:{scope.handle}"
    )


async def test_check_without_user(monitor: DayProgressionManager) -> None:
    """No resolved user reports day 1 and writes nothing."""
    result = await monitor.async_check_new_day(None)

    assert result == {"is_new_day": False, "current_day": 1}
    assert monitor.store.entries == {}


async def test_first_check_persists_default(
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
    clock: FakeClock,
) -> None:
    """A first check stores day 1 anchored at now and reports no crossing."""
    result = await monitor.async_check_new_day(scope)

    assert result == {"is_new_day": False, "current_day": 1}
    assert await _stored_state(coordinator, scope) == {
        "current_day": 1,
        "last_midnight_check": clock().isoformat(),
    }


async def test_crossing_midnight(
    hass: HomeAssistant,
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
    clock: FakeClock,
) -> None:
    """23:00Z then 00:30Z advances to day 2, a check at 00:45Z does not."""
    events = capture_signal(hass, coordinator.config_entry.entry_id, "new_day")
    await monitor.async_check_new_day(scope)

    clock.set(make_utc_dt(2024, 1, 2, 0, 30))
    result = await monitor.async_check_new_day(scope)
    await hass.async_block_till_done()

    assert result == {"is_new_day": True, "current_day": 2}
    assert monitor.is_new_day is True
    assert monitor.current_day == 2
    assert events == [{"handle": scope.handle, "current_day": 2}]
    coordinator.async_request_refresh.assert_awaited_once()

    clock.set(make_utc_dt(2024, 1, 2, 0, 45))
    result = await monitor.async_check_new_day(scope)

    assert result == {"is_new_day": False, "current_day": 2}
    assert monitor.is_new_day is False
    # Clearing the flag refreshes sensors too
    assert coordinator.async_request_refresh.await_count == 2
    stored = await _stored_state(coordinator, scope)
    assert stored["last_midnight_check"] == make_utc_dt(2024, 1, 2, 0, 30).isoformat()


async def test_repeated_checks_same_day_are_idempotent(
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
    clock: FakeClock,
) -> None:
    """Many checks within one day leave the stored state untouched."""
    await monitor.async_check_new_day(scope)
    before = await _stored_state(coordinator, scope)

    for _ in range(5):
        clock.advance(minutes=5)
        await monitor.async_check_new_day(scope)

    assert await _stored_state(coordinator, scope) == before
    coordinator.async_request_refresh.assert_not_awaited()


async def test_multi_day_gap_advances_once(
    monitor: DayProgressionManager, scope: UserScope, clock: FakeClock
) -> None:
    """Three days offline still move the cursor by a single day."""
    await monitor.async_check_new_day(scope)

    clock.advance(days=3)
    result = await monitor.async_check_new_day(scope)

    assert result == {"is_new_day": True, "current_day": 2}


async def test_failure_reports_last_known_day(
    monitor: DayProgressionManager,
    scope: UserScope,
    clock: FakeClock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A store failure is logged and reported as no crossing."""
    await monitor.async_check_new_day(scope)
    clock.advance(days=1)
    await monitor.async_check_new_day(scope)

    clock.advance(days=1)
    with patch.object(monitor.store, "async_get", side_effect=RuntimeError("broken")):
        result = await monitor.async_check_new_day(scope)

    assert result == {"is_new_day": False, "current_day": 2}
    assert "Day check failed" in caplog.text


async def test_advance_and_reset(
    hass: HomeAssistant,
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
) -> None:
    """Manual advance ignores the calendar, reset returns to day 1."""
    new_day_events = capture_signal(hass, coordinator.config_entry.entry_id, "new_day")
    reset_events = capture_signal(hass, coordinator.config_entry.entry_id, "day_reset")

    await monitor.async_advance_to_next_day(scope)
    state = await monitor.async_advance_to_next_day(scope)

    assert state["current_day"] == 3
    assert monitor.is_new_day is True

    state = await monitor.async_reset(scope)
    await hass.async_block_till_done()

    assert state["current_day"] == 1
    assert monitor.is_new_day is False
    assert (await _stored_state(coordinator, scope))["current_day"] == 1
    assert [event["current_day"] for event in new_day_events] == [2, 3]
    assert reset_events == [{"handle": scope.handle}]


async def test_advance_without_user_raises(monitor: DayProgressionManager) -> None:
    """Advance and reset require a resolved user."""
    with pytest.raises(NoActiveUserError):
        await monitor.async_advance_to_next_day(None)
    with pytest.raises(NoActiveUserError):
        await monitor.async_reset(None)


async def test_load_state_repairs_stored_value(
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
) -> None:
    """A stored day below 1 is read back as day 1."""
    await coordinator.store.async_set(
        f"dayProgression:{scope.handle}",
        {"current_day": 0, "last_midnight_check": "2024-01-01T10:00:00+00:00"},
    )

    state = await monitor.async_load_state(scope)

    assert state["current_day"] == 1


async def test_acknowledge_new_day(
    monitor: DayProgressionManager, scope: UserScope
) -> None:
    """The UI can clear the new-day flag."""
    await monitor.async_advance_to_next_day(scope)

    monitor.acknowledge_new_day()

    assert monitor.is_new_day is False


async def test_start_and_stop_are_idempotent(
    hass: HomeAssistant,
    coordinator: RiseHabitsDataCoordinator,
    scope: UserScope,
) -> None:
    """Start schedules one timer and checks immediately, stop cancels it."""
    manager = DayProgressionManager(
        hass, coordinator, check_interval=timedelta(minutes=2)
    )
    unsub = MagicMock()

    with patch(TIMER_PATH, return_value=unsub) as mock_track:
        await manager.async_start()
        await manager.async_start()

        assert manager.is_running is True
        mock_track.assert_called_once()
        assert mock_track.call_args.args[2] == timedelta(minutes=2)

    # The immediate check initialized the user's cursor
    assert await _stored_state(coordinator, scope) is not None

    await manager.async_stop()
    await manager.async_stop()

    unsub.assert_called_once()
    assert manager.is_running is False


async def test_tick_swallows_errors(
    monitor: DayProgressionManager, caplog: pytest.LogCaptureFixture
) -> None:
    """A failing check never escapes the timer callback."""
    with patch.object(
        monitor, "async_check_new_day", side_effect=RuntimeError("unexpected")
    ):
        await monitor._async_on_tick(make_utc_dt(2024, 1, 2))

    assert "Day monitor tick failed" in caplog.text


async def test_program_cleared_drops_new_day_flag(
    hass: HomeAssistant,
    coordinator: RiseHabitsDataCoordinator,
    monitor: DayProgressionManager,
    scope: UserScope,
) -> None:
    """Clearing the program resets the transient flag."""
    await coordinator.program_manager.async_generate_program(scope)
    await monitor.async_advance_to_next_day(scope)

    await coordinator.program_manager.async_clear_program(scope)
    await hass.async_block_till_done()

    assert monitor.is_new_day is False
    assert monitor.current_day == 1
