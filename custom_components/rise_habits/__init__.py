# File: __init__.py
"""Initialization file for the Rise Habits integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator and manager initialization.
- Day monitor start/stop tied to the entry lifecycle.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import RiseHabitsDataCoordinator
from .rh_helpers import get_storage_key
from .services import async_setup_services, async_unload_services
from .store import RiseHabitsStore


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Rise Habits entry: %s", entry.entry_id)

    # Set the home assistant configured timezone for date/time operations
    # Must be done early before any components that use datetime helpers
    const.set_default_timezone(hass)

    store = RiseHabitsStore(hass, get_storage_key(entry.entry_id))
    await store.async_initialize()

    coordinator = RiseHabitsDataCoordinator(hass, entry, store)
    await coordinator.async_setup_managers()

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: store,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    # Start polling for calendar-day crossings once entities exist
    await coordinator.day_progression_manager.async_start()

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    const.LOGGER.info("INFO: Rise Habits setup complete for entry: %s", entry.entry_id)
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so new intervals take effect."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Rise Habits entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        await entry_data[const.COORDINATOR].day_progression_manager.async_stop()
        if not hass.data[const.DOMAIN]:
            hass.data.pop(const.DOMAIN)

        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its storage file."""
    const.LOGGER.info("INFO: Removing Rise Habits entry: %s", entry.entry_id)

    # The entry is already unloaded here, so open its store directly
    store = RiseHabitsStore(hass, get_storage_key(entry.entry_id))
    await store.async_delete_storage()

    const.LOGGER.info("INFO: Rise Habits entry data cleared: %s", entry.entry_id)
