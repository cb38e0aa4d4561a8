"""Shared fixtures for Rise Habits tests."""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.rise_habits import const
from custom_components.rise_habits.coordinator import RiseHabitsDataCoordinator
from custom_components.rise_habits.managers import DayProgressionManager
from custom_components.rise_habits.store import RiseHabitsStore
from custom_components.rise_habits.type_defs import UserScope
from tests.helpers import FakeClock, make_utc_dt

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name
# pylint: disable=redefined-outer-name

TEST_HANDLE = "alice@example.com"
TEST_USER_ID = "user-alice"
UTC_ZONE = ZoneInfo("UTC")


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry for one user."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="Alice",
        data={
            const.CONF_USER_HANDLE: TEST_HANDLE,
            const.CONF_USER_ID: TEST_USER_ID,
            const.CONF_USER_NAME: "Alice",
        },
        options={
            const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL,
            const.CONF_DAY_CHECK_INTERVAL: const.DEFAULT_DAY_CHECK_INTERVAL,
            const.CONF_SNAPSHOT_TOP_N: const.DEFAULT_SNAPSHOT_TOP_N,
        },
        entry_id="test_entry_id",
        unique_id=TEST_HANDLE,
    )


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock parked at 2024-01-01T23:00Z."""
    return FakeClock(make_utc_dt(2024, 1, 1, 23))


@pytest.fixture
async def store(hass: HomeAssistant) -> RiseHabitsStore:
    """Return an initialized, empty store backed by the mocked HA storage."""
    rh_store = RiseHabitsStore(hass, "rise_habits_test")
    await rh_store.async_initialize()
    return rh_store


@pytest.fixture
async def coordinator(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    store: RiseHabitsStore,
    clock: FakeClock,
) -> AsyncGenerator[RiseHabitsDataCoordinator]:
    """Return a coordinator wired to the fake clock, without platform setup.

    The day monitor is rebuilt with an explicit UTC timezone so calendar
    boundaries do not depend on the test instance's configured zone.
    """
    mock_config_entry.add_to_hass(hass)
    rh_coordinator = RiseHabitsDataCoordinator(
        hass, mock_config_entry, store, clock=clock
    )
    rh_coordinator.day_progression_manager = DayProgressionManager(
        hass, rh_coordinator, tz=UTC_ZONE
    )
    rh_coordinator.async_request_refresh = AsyncMock()  # type: ignore[method-assign]
    await rh_coordinator.async_setup_managers()
    yield rh_coordinator
    await rh_coordinator.day_progression_manager.async_stop()


@pytest.fixture
def scope() -> UserScope:
    """Return the resolved scope of the test user."""
    return UserScope(user_id=TEST_USER_ID, handle=TEST_HANDLE)


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> AsyncGenerator[MockConfigEntry]:
    """Set up the integration through its config entry and unload afterwards."""
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    yield mock_config_entry
    if mock_config_entry.entry_id in hass.data.get(const.DOMAIN, {}):
        assert await hass.config_entries.async_unload(mock_config_entry.entry_id)
        await hass.async_block_till_done()
