# File: options_flow.py
"""Options Flow for the Rise Habits integration.

Edits the polling intervals and the snapshot size. Saving the options
reloads the entry through the update listener registered at setup.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries

from . import const


class RiseHabitsOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for intervals and snapshot size."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options: dict[str, Any] = {}

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and store the general options."""
        self._entry_options = dict(self.config_entry.options)

        if user_input is not None:
            self._entry_options.update(user_input)
            const.LOGGER.debug(
                "DEBUG: Updating options for entry %s: %s",
                self.config_entry.entry_id,
                user_input,
            )
            return self.async_create_entry(title="", data=self._entry_options)

        schema = vol.Schema(
            {
                vol.Required(
                    const.CONF_UPDATE_INTERVAL,
                    default=self._entry_options.get(
                        const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                    ),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=60)),
                vol.Required(
                    const.CONF_DAY_CHECK_INTERVAL,
                    default=self._entry_options.get(
                        const.CONF_DAY_CHECK_INTERVAL, const.DEFAULT_DAY_CHECK_INTERVAL
                    ),
                ): vol.All(vol.Coerce(int), vol.Range(min=1, max=60)),
                vol.Required(
                    const.CONF_SNAPSHOT_TOP_N,
                    default=self._entry_options.get(
                        const.CONF_SNAPSHOT_TOP_N, const.DEFAULT_SNAPSHOT_TOP_N
                    ),
                ): vol.All(vol.Coerce(int), vol.Range(min=0, max=6)),
            }
        )
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT, data_schema=schema
        )
