# File: config_flow.py
"""Config flow for the Rise Habits integration.

One config entry per user handle. The handle (email-like) namespaces every
storage key; the optional display name only labels the device.
"""

from __future__ import annotations

from typing import Any
import uuid

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from .options_flow import RiseHabitsOptionsFlowHandler
from .rh_helpers import normalize_handle


def _build_user_schema(defaults: dict[str, Any] | None = None) -> vol.Schema:
    defaults = defaults or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_USER_HANDLE,
                default=defaults.get(const.CONF_USER_HANDLE, ""),
            ): str,
            vol.Optional(
                const.CONF_USER_NAME,
                default=defaults.get(const.CONF_USER_NAME, ""),
            ): str,
        }
    )


class RiseHabitsConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Rise Habits."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Ask for the user handle and display name."""
        errors: dict[str, str] = {}

        if user_input is not None:
            handle = normalize_handle(user_input.get(const.CONF_USER_HANDLE))
            try:
                vol.Email()(handle)
            except vol.Invalid:
                errors[const.CONF_USER_HANDLE] = const.ERROR_INVALID_HANDLE
            else:
                await self.async_set_unique_id(handle)
                self._abort_if_unique_id_configured()

                user_name = (user_input.get(const.CONF_USER_NAME) or "").strip()
                const.LOGGER.info("INFO: Creating Rise Habits entry for '%s'", handle)
                return self.async_create_entry(
                    title=user_name or handle,
                    data={
                        const.CONF_USER_HANDLE: handle,
                        const.CONF_USER_ID: uuid.uuid4().hex,
                        const.CONF_USER_NAME: user_name,
                    },
                    options={
                        const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL,
                        const.CONF_DAY_CHECK_INTERVAL: const.DEFAULT_DAY_CHECK_INTERVAL,
                        const.CONF_SNAPSHOT_TOP_N: const.DEFAULT_SNAPSHOT_TOP_N,
                    },
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=_build_user_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return RiseHabitsOptionsFlowHandler(config_entry)
