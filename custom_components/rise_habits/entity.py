"""Base entity classes for Rise Habits integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import RiseHabitsDataCoordinator

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_user_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info for the program owner of a config entry."""
    handle = config_entry.data.get(const.CONF_USER_HANDLE, config_entry.entry_id)
    name = config_entry.data.get(const.CONF_USER_NAME) or handle
    return DeviceInfo(
        identifiers={(const.DOMAIN, config_entry.entry_id)},
        name=f"{name} ({const.RISE_HABITS_TITLE})",
        manufacturer=const.RISE_HABITS_TITLE,
        model="66-Day Program",
    )


class RiseHabitsCoordinatorEntity(CoordinatorEntity[RiseHabitsDataCoordinator]):
    """Base entity class for Rise Habits sensors with typed coordinator access."""

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: RiseHabitsDataCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the entity and attach it to the user's device."""
        super().__init__(coordinator)
        self._entry = entry
        self._attr_device_info = create_user_device_info(entry)

    @property
    def coordinator(self) -> RiseHabitsDataCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: RiseHabitsDataCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)

    @property
    def payload(self) -> dict[str, Any]:
        """Return the latest coordinator payload, empty before the first refresh."""
        return self.coordinator.data or {}
