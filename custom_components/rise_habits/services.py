# File: services.py
"""Defines custom services for the Rise Habits integration.

These services allow direct actions through scripts or automations. Every
service accepts an optional config_entry_id; without it the first loaded
Rise Habits entry is used.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from . import rh_helpers as rh
from .coordinator import RiseHabitsDataCoordinator

# --- Service Schemas ---
_ENTRY_FIELD = {vol.Optional(const.FIELD_CONFIG_ENTRY_ID): cv.string}

_LEVEL = vol.All(vol.Coerce(int), vol.Range(min=1, max=10))
_NON_NEGATIVE = vol.All(vol.Coerce(float), vol.Range(min=0))

QUESTIONNAIRE_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_Q_SLEEP_GOAL): cv.string,
        vol.Optional(const.DATA_Q_WATER_GOAL): cv.string,
        vol.Optional(const.DATA_Q_EXERCISE_GOAL): cv.string,
        vol.Optional(const.DATA_Q_MIND_GOAL): cv.string,
        vol.Optional(const.DATA_Q_SCREEN_TIME_GOAL): cv.string,
        vol.Optional(const.DATA_Q_SHOWER_GOAL): cv.string,
        vol.Optional(const.DATA_Q_WAKE_UP_TIME): cv.string,
        vol.Optional(const.DATA_Q_BED_TIME): cv.string,
        vol.Optional(const.DATA_Q_CURRENT_WATER_INTAKE): _NON_NEGATIVE,
        vol.Optional(const.DATA_Q_CURRENT_EXERCISE_MINUTES): _NON_NEGATIVE,
        vol.Optional(const.DATA_Q_CURRENT_SCREEN_TIME_HOURS): _NON_NEGATIVE,
        vol.Optional(const.DATA_Q_STRESS_LEVEL): _LEVEL,
        vol.Optional(const.DATA_Q_ENERGY_LEVEL): _LEVEL,
        vol.Optional(const.DATA_Q_MOTIVATION_LEVEL): _LEVEL,
        vol.Optional(const.DATA_Q_EXTRA_TASKS): vol.All(cv.ensure_list, [cv.string]),
    }
)

GENERATE_PROGRAM_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Optional(const.FIELD_QUESTIONNAIRE, default={}): QUESTIONNAIRE_SCHEMA,
    }
)

ENTRY_ONLY_SCHEMA = vol.Schema(_ENTRY_FIELD)

TASK_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_DAY): cv.positive_int,
        vol.Required(const.FIELD_TASK_ID): cv.string,
    }
)

SET_DAY_NOTES_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_DAY): cv.positive_int,
        vol.Optional(const.FIELD_NOTES, default=""): cv.string,
    }
)

ADD_GOAL_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_GOAL_TITLE): cv.string,
        vol.Optional(const.FIELD_GOAL_CATEGORY, default=const.CATEGORY_CUSTOM): vol.In(
            const.GOAL_CATEGORIES
        ),
        vol.Optional(const.FIELD_GOAL_DESCRIPTION, default=""): cv.string,
        vol.Optional(const.FIELD_GOAL_VALUE, default=""): cv.string,
        vol.Optional(const.FIELD_GOAL_TARGET, default=""): cv.string,
        vol.Optional(const.FIELD_GOAL_IS_ACTIVE, default=True): cv.boolean,
    }
)

UPDATE_GOAL_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_GOAL_ID): cv.string,
        vol.Optional(const.FIELD_GOAL_TITLE): cv.string,
        vol.Optional(const.FIELD_GOAL_CATEGORY): vol.In(const.GOAL_CATEGORIES),
        vol.Optional(const.FIELD_GOAL_DESCRIPTION): cv.string,
        vol.Optional(const.FIELD_GOAL_VALUE): cv.string,
        vol.Optional(const.FIELD_GOAL_TARGET): cv.string,
        vol.Optional(const.FIELD_GOAL_IS_ACTIVE): cv.boolean,
    }
)

GOAL_ID_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_GOAL_ID): cv.string,
    }
)


def _get_coordinator(hass: HomeAssistant, call: ServiceCall) -> RiseHabitsDataCoordinator:
    """Resolve the coordinator targeted by a service call."""
    entry_id = call.data.get(const.FIELD_CONFIG_ENTRY_ID)
    coordinator = rh.get_coordinator(hass, entry_id)
    if coordinator is None:
        const.LOGGER.warning(
            "WARNING: %s: %s", call.service, const.MSG_NO_ENTRY_FOUND
        )
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    return coordinator


def _wrap(
    hass: HomeAssistant,
    action: Callable[[RiseHabitsDataCoordinator, ServiceCall], Awaitable[Any]],
) -> Callable[[ServiceCall], Awaitable[None]]:
    """Build a handler that runs action, then refreshes the coordinator.

    Domain errors (HomeAssistantError) are logged and re-raised as is.
    """

    async def handler(call: ServiceCall) -> None:
        coordinator = _get_coordinator(hass, call)
        try:
            await action(coordinator, call)
        except HomeAssistantError as err:
            const.LOGGER.info("ERROR: %s: %s", call.service, err)
            raise
        await coordinator.async_request_refresh()

    return handler


# --- Service Actions ---
async def _generate_program(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.program_manager.async_generate_program(
        coordinator.user_scope, call.data.get(const.FIELD_QUESTIONNAIRE)
    )


async def _clear_program(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.program_manager.async_clear_program(coordinator.user_scope)


async def _complete_task(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    entry = await coordinator.progress_manager.async_complete_task(
        coordinator.user_scope, call.data[const.FIELD_DAY], call.data[const.FIELD_TASK_ID]
    )
    const.LOGGER.info(
        "INFO: Task '%s' completed on day %s (%s/%s)",
        call.data[const.FIELD_TASK_ID],
        call.data[const.FIELD_DAY],
        entry[const.DATA_DAY_COMPLETED_TASKS],
        entry[const.DATA_DAY_TOTAL_TASKS],
    )


async def _uncomplete_task(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.progress_manager.async_uncomplete_task(
        coordinator.user_scope, call.data[const.FIELD_DAY], call.data[const.FIELD_TASK_ID]
    )


async def _set_day_notes(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.progress_manager.async_set_day_notes(
        coordinator.user_scope, call.data[const.FIELD_DAY], call.data[const.FIELD_NOTES]
    )


async def _check_new_day(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    result = await coordinator.day_progression_manager.async_check_new_day(
        coordinator.user_scope
    )
    const.LOGGER.info(
        "INFO: Manual day check: new_day=%s, current_day=%s",
        result[const.DATA_PROGRESSION_IS_NEW_DAY],
        result[const.DATA_PROGRESSION_CURRENT_DAY],
    )


async def _acknowledge_new_day(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    coordinator.day_progression_manager.acknowledge_new_day()


async def _advance_day(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.day_progression_manager.async_advance_to_next_day(
        coordinator.user_scope
    )


async def _reset_day_progression(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.day_progression_manager.async_reset(coordinator.user_scope)


async def _add_goal(coordinator: RiseHabitsDataCoordinator, call: ServiceCall) -> None:
    await coordinator.goal_manager.async_add_goal(
        coordinator.user_scope,
        title=call.data[const.FIELD_GOAL_TITLE],
        category=call.data[const.FIELD_GOAL_CATEGORY],
        description=call.data[const.FIELD_GOAL_DESCRIPTION],
        value=call.data[const.FIELD_GOAL_VALUE],
        target=call.data[const.FIELD_GOAL_TARGET],
        is_active=call.data[const.FIELD_GOAL_IS_ACTIVE],
    )


async def _update_goal(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    updates = {
        const.DATA_GOAL_TITLE: call.data.get(const.FIELD_GOAL_TITLE),
        const.DATA_GOAL_CATEGORY: call.data.get(const.FIELD_GOAL_CATEGORY),
        const.DATA_GOAL_DESCRIPTION: call.data.get(const.FIELD_GOAL_DESCRIPTION),
        const.DATA_GOAL_VALUE: call.data.get(const.FIELD_GOAL_VALUE),
        const.DATA_GOAL_TARGET: call.data.get(const.FIELD_GOAL_TARGET),
        const.DATA_GOAL_IS_ACTIVE: call.data.get(const.FIELD_GOAL_IS_ACTIVE),
    }
    await coordinator.goal_manager.async_update_goal(
        coordinator.user_scope, call.data[const.FIELD_GOAL_ID], updates
    )


async def _delete_goal(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.goal_manager.async_delete_goal(
        coordinator.user_scope, call.data[const.FIELD_GOAL_ID]
    )


async def _toggle_goal(
    coordinator: RiseHabitsDataCoordinator, call: ServiceCall
) -> None:
    await coordinator.goal_manager.async_toggle_goal(
        coordinator.user_scope, call.data[const.FIELD_GOAL_ID]
    )


_SERVICES: dict[str, tuple[Callable[..., Awaitable[None]], vol.Schema]] = {
    const.SERVICE_GENERATE_PROGRAM: (_generate_program, GENERATE_PROGRAM_SCHEMA),
    const.SERVICE_CLEAR_PROGRAM: (_clear_program, ENTRY_ONLY_SCHEMA),
    const.SERVICE_COMPLETE_TASK: (_complete_task, TASK_SCHEMA),
    const.SERVICE_UNCOMPLETE_TASK: (_uncomplete_task, TASK_SCHEMA),
    const.SERVICE_SET_DAY_NOTES: (_set_day_notes, SET_DAY_NOTES_SCHEMA),
    const.SERVICE_CHECK_NEW_DAY: (_check_new_day, ENTRY_ONLY_SCHEMA),
    const.SERVICE_ACKNOWLEDGE_NEW_DAY: (_acknowledge_new_day, ENTRY_ONLY_SCHEMA),
    const.SERVICE_ADVANCE_DAY: (_advance_day, ENTRY_ONLY_SCHEMA),
    const.SERVICE_RESET_DAY_PROGRESSION: (_reset_day_progression, ENTRY_ONLY_SCHEMA),
    const.SERVICE_ADD_GOAL: (_add_goal, ADD_GOAL_SCHEMA),
    const.SERVICE_UPDATE_GOAL: (_update_goal, UPDATE_GOAL_SCHEMA),
    const.SERVICE_DELETE_GOAL: (_delete_goal, GOAL_ID_SCHEMA),
    const.SERVICE_TOGGLE_GOAL: (_toggle_goal, GOAL_ID_SCHEMA),
}


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Rise Habits services. Safe to call once per loaded entry."""
    for service, (action, schema) in _SERVICES.items():
        if hass.services.has_service(const.DOMAIN, service):
            continue
        hass.services.async_register(
            const.DOMAIN, service, _wrap(hass, action), schema=schema
        )


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Rise Habits services once no entry is loaded."""
    if hass.data.get(const.DOMAIN):
        return

    for service in const.ALL_SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Rise Habits services have been unregistered")
