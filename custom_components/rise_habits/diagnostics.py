"""Diagnostics support for Rise Habits integration.

The diagnostics JSON returns the raw storage document (meta plus every
per-user key) together with the runtime state of the day monitor.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import RiseHabitsDataCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: RiseHabitsDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    monitor = coordinator.day_progression_manager

    return {
        "storage_path": coordinator.store.get_storage_path(),
        "storage": coordinator.store.data,
        "monitor": {
            "running": monitor.is_running,
            "is_new_day": monitor.is_new_day,
            "current_day": monitor.current_day,
            "timezone": str(monitor.tz),
        },
    }
