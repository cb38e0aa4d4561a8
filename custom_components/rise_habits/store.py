# File: store.py
"""Handles persistent data storage for the Rise Habits integration.

Uses Home Assistant's Storage helper as a small key-value store. Values are
JSON-equivalent documents (schedule, day progression, goals, questionnaire)
kept under per-user keys such as 'schedule:alice@example.com'.

Reads never raise: a missing key returns None. Writes raise PersistenceError
and leave the in-memory cache as it was before the failed write.
"""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from .errors import PersistenceError
from .utils.dt_utils import dt_now_iso

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from homeassistant.core import HomeAssistant

_MISSING = object()


class RiseHabitsStore:
    """Key-value wrapper around Home Assistant's Store API.

    The whole document is loaded once at startup and every write saves the
    full document, so a value is durable once async_set returns.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    @staticmethod
    def get_default_structure() -> dict[str, Any]:
        """Return canonical empty data structure for fresh installations."""
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION,
                const.DATA_META_CREATED_AT: dt_now_iso(),
            },
            const.DATA_ENTRIES: {},
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, or the file holds something unexpected, initializes
        with an empty structure.
        """
        const.LOGGER.debug("DEBUG: RiseHabitsStore: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = RiseHabitsStore.get_default_structure()
        elif not isinstance(existing_data, dict) or not isinstance(
            existing_data.get(const.DATA_ENTRIES), dict
        ):
            const.LOGGER.warning(
                "WARNING: Storage at %s has an unexpected layout. Starting empty",
                self._store.path,
            )
            self._data = RiseHabitsStore.get_default_structure()
        else:
            self._data = existing_data
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s keys",
                len(self._data[const.DATA_ENTRIES]),
            )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    @property
    def entries(self) -> dict[str, Any]:
        """Return the key-value section of the document."""
        return self._data.setdefault(const.DATA_ENTRIES, {})

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path

    async def async_get(self, key: str) -> Any | None:
        """Return a deep copy of the value stored under key, or None.

        Callers may mutate the result freely; nothing is shared with the cache.
        """
        value = self.entries.get(key)
        if value is None:
            return None
        return deepcopy(value)

    async def async_set(self, key: str, value: Any) -> None:
        """Store a value under key and save the document.

        Raises:
            PersistenceError: The document could not be saved. The previous
                value (or absence) of key is restored in memory.
        """
        previous = self.entries.get(key, _MISSING)
        self.entries[key] = deepcopy(value)
        try:
            await self._async_save_or_raise()
        except PersistenceError as err:
            self._restore(key, previous)
            raise PersistenceError(key) from err
        const.LOGGER.debug("DEBUG: Stored value for key '%s'", key)

    async def async_remove(self, key: str) -> None:
        """Delete key and save the document. Missing keys are ignored.

        Raises:
            PersistenceError: The document could not be saved.
        """
        previous = self.entries.pop(key, _MISSING)
        if previous is _MISSING:
            return
        try:
            await self._async_save_or_raise()
        except PersistenceError as err:
            self._restore(key, previous)
            raise PersistenceError(key) from err
        const.LOGGER.debug("DEBUG: Removed key '%s'", key)

    async def async_set_many(
        self, values: Mapping[str, Any], remove: Iterable[str] = ()
    ) -> None:
        """Apply several writes and removals, then save the document once.

        Either every change is durable or none is: on failure all touched keys
        get their previous value (or absence) back in memory.

        Raises:
            PersistenceError: The document could not be saved.
        """
        touched: dict[str, Any] = {}
        for key in remove:
            touched.setdefault(key, self.entries.pop(key, _MISSING))
        for key, value in values.items():
            touched.setdefault(key, self.entries.get(key, _MISSING))
            self.entries[key] = deepcopy(value)
        try:
            await self._async_save_or_raise()
        except PersistenceError:
            for key, previous in touched.items():
                self._restore(key, previous)
            raise
        const.LOGGER.debug(
            "DEBUG: Stored %s keys in one save: %s", len(touched), sorted(touched)
        )

    def _restore(self, key: str, previous: Any) -> None:
        if previous is _MISSING:
            self.entries.pop(key, None)
        else:
            self.entries[key] = previous

    async def _async_save_or_raise(self) -> None:
        """Save the document, logging and raising PersistenceError on failure."""
        try:
            await self._store.async_save(self._data)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
            raise PersistenceError(self._storage_key) from err
        except (TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s",
                err,
            )
            raise PersistenceError(self._storage_key) from err
        except HomeAssistantError as err:
            const.LOGGER.error("ERROR: Failed to save storage: %s", err)
            raise PersistenceError(self._storage_key) from err

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        self._data = RiseHabitsStore.get_default_structure()
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
