# File: sensor.py
"""Sensors for the Rise Habits integration.

Sensors Defined in This File (4 kinds):

01. ProgramCurrentDaySensor - the user's current program day
02. TodayProgressSensor - completed tasks of the current day, with snapshot
    attributes (date, total, first incomplete task titles)
03. HabitStatsSensor - one per habit category; completion rate with streak
    statistics as attributes
04. GoalsSensor - number of active goals, with the goal list and
    questionnaire answers as attributes
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.const import PERCENTAGE

from . import const
from .entity import RiseHabitsCoordinatorEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import RiseHabitsDataCoordinator


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for Rise Habits integration."""
    coordinator: RiseHabitsDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    entities: list[SensorEntity] = [
        ProgramCurrentDaySensor(coordinator, entry),
        TodayProgressSensor(coordinator, entry),
        GoalsSensor(coordinator, entry),
    ]
    entities.extend(
        HabitStatsSensor(coordinator, entry, category)
        for category in const.HABIT_CATEGORIES
    )
    async_add_entities(entities)


# ------------------------------------------------------------------------------------------
class ProgramCurrentDaySensor(RiseHabitsCoordinatorEntity, SensorEntity):
    """Sensor for the user's current program day (1-based)."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_CURRENT_DAY
    _attr_icon = "mdi:calendar-today"
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: RiseHabitsDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_CURRENT_DAY}"

    @property
    def native_value(self) -> int:
        """Return the current program day."""
        return self.payload.get(const.DATA_COORD_CURRENT_DAY, const.FIRST_PROGRAM_DAY)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose program length, generation state and the new-day flag."""
        return {
            const.ATTR_USER_HANDLE: self._entry.data.get(const.CONF_USER_HANDLE),
            const.ATTR_PROGRAM_LENGTH: const.PROGRAM_LENGTH_DAYS,
            const.ATTR_PROGRAM_GENERATED: self.payload.get(
                const.DATA_COORD_PROGRAM_GENERATED, False
            ),
            const.ATTR_IS_NEW_DAY: self.coordinator.day_progression_manager.is_new_day,
        }


# ------------------------------------------------------------------------------------------
class TodayProgressSensor(RiseHabitsCoordinatorEntity, SensorEntity):
    """Sensor for completed tasks of the current day.

    State is the number of completed habits; attributes carry the rest of
    the widget snapshot.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_TODAY
    _attr_icon = "mdi:checkbox-marked-circle-outline"

    def __init__(self, coordinator: RiseHabitsDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_TODAY}"

    @property
    def _snapshot(self) -> dict[str, Any]:
        return self.payload.get(const.DATA_COORD_SNAPSHOT) or {}

    @property
    def native_value(self) -> int:
        """Return completed habits today."""
        return self._snapshot.get(const.DATA_SNAPSHOT_COMPLETED_HABITS, const.DEFAULT_ZERO)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the snapshot fields."""
        snapshot = self._snapshot
        return {
            const.ATTR_DATE: snapshot.get(const.DATA_SNAPSHOT_DATE),
            const.ATTR_COMPLETED_HABITS: snapshot.get(
                const.DATA_SNAPSHOT_COMPLETED_HABITS, const.DEFAULT_ZERO
            ),
            const.ATTR_TOTAL_HABITS: snapshot.get(
                const.DATA_SNAPSHOT_TOTAL_HABITS, const.DEFAULT_ZERO
            ),
            const.ATTR_TOP_TASKS: list(snapshot.get(const.DATA_SNAPSHOT_TOP_TASKS, [])),
        }


# ------------------------------------------------------------------------------------------
class HabitStatsSensor(RiseHabitsCoordinatorEntity, SensorEntity):
    """Sensor for one habit category's completion rate.

    Streak attributes are computed as of the current program day.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_HABIT_STATS
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:chart-line"

    def __init__(
        self,
        coordinator: RiseHabitsDataCoordinator,
        entry: ConfigEntry,
        category: str,
    ):
        """Initialize the sensor.

        Args:
            coordinator: RiseHabitsDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            category: Habit category this sensor reports on.
        """
        super().__init__(coordinator, entry)
        self._category = category
        self._attr_unique_id = (
            f"{entry.entry_id}_{category}{const.SENSOR_UID_SUFFIX_HABIT_STATS}"
        )
        self._attr_translation_placeholders = {
            const.TRANS_KEY_SENSOR_ATTR_CATEGORY: category,
        }

    @property
    def _stats(self) -> dict[str, Any]:
        return (self.payload.get(const.DATA_COORD_STATS) or {}).get(self._category, {})

    @property
    def native_value(self) -> float:
        """Return the category completion rate (0..100)."""
        return self._stats.get(const.DATA_STATS_COMPLETION_RATE, 0.0)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose totals and streaks."""
        stats = self._stats
        return {
            const.DATA_STATS_CATEGORY: self._category,
            const.DATA_STATS_TOTAL_COMPLETED: stats.get(
                const.DATA_STATS_TOTAL_COMPLETED, const.DEFAULT_ZERO
            ),
            const.DATA_STATS_CURRENT_STREAK: stats.get(
                const.DATA_STATS_CURRENT_STREAK, const.DEFAULT_ZERO
            ),
            const.DATA_STATS_LONGEST_STREAK: stats.get(
                const.DATA_STATS_LONGEST_STREAK, const.DEFAULT_ZERO
            ),
            const.DATA_STATS_LAST_COMPLETED: stats.get(const.DATA_STATS_LAST_COMPLETED),
        }


# ------------------------------------------------------------------------------------------
class GoalsSensor(RiseHabitsCoordinatorEntity, SensorEntity):
    """Sensor for the user's goals.

    State is the number of active goals; the full list (active and inactive)
    and the questionnaire answers are attributes.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_GOALS
    _attr_icon = "mdi:flag-checkered"

    def __init__(self, coordinator: RiseHabitsDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_GOALS}"

    @property
    def native_value(self) -> int:
        """Return the number of active goals."""
        return self.payload.get(const.DATA_COORD_ACTIVE_GOALS, const.DEFAULT_ZERO)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the goal records and questionnaire answers."""
        goals = list(self.payload.get(const.DATA_COORD_GOALS) or [])
        return {
            const.ATTR_TOTAL_GOALS: len(goals),
            const.ATTR_GOALS: goals,
            const.ATTR_QUESTIONNAIRE: self.payload.get(const.DATA_COORD_QUESTIONNAIRE),
        }
