# File: rh_helpers.py
"""Rise Habits helper functions and shared logic.

Lookup helpers for config entries and coordinators, dispatcher signal naming,
and user-scope resolution shared by the coordinator, managers and services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import const
from .type_defs import UserScope

if TYPE_CHECKING:
    from collections.abc import Mapping

    from homeassistant.core import HomeAssistant

    from .coordinator import RiseHabitsDataCoordinator


# -------- Config entry / coordinator lookup --------
def get_first_entry_id(hass: HomeAssistant) -> str | None:
    """Retrieve the first Rise Habits config entry ID."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    return next(iter(domain_entries.keys()), None)


def get_coordinator(
    hass: HomeAssistant, entry_id: str | None = None
) -> RiseHabitsDataCoordinator | None:
    """Return the coordinator for an entry, or for the first entry if omitted."""
    if entry_id is None:
        entry_id = get_first_entry_id(hass)
    if entry_id is None:
        return None
    entry_data = hass.data.get(const.DOMAIN, {}).get(entry_id)
    if not entry_data:
        return None
    return entry_data.get(const.COORDINATOR)


def get_storage_key(entry_id: str) -> str:
    """Return the storage file key of one config entry."""
    return f"{const.STORAGE_KEY}.{entry_id}"


# -------- Signals --------
def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Format: 'rise_habits_{entry_id}_{suffix}'

    Example:
        >>> get_event_signal("abc123", const.SIGNAL_SUFFIX_NEW_DAY)
        'rise_habits_abc123_new_day'
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"


# -------- User scope --------
def normalize_handle(handle: Any) -> str | None:
    """Return a stripped, lower-cased handle or None when blank."""
    if not isinstance(handle, str):
        return None
    handle = handle.strip().lower()
    return handle or None


def resolve_user_scope(entry_data: Mapping[str, Any]) -> UserScope | None:
    """Resolve the program owner from config entry data.

    The handle namespaces every storage key. The opaque user id falls back to
    the handle when the entry does not carry one.
    """
    handle = normalize_handle(entry_data.get(const.CONF_USER_HANDLE))
    if handle is None:
        return None
    user_id = entry_data.get(const.CONF_USER_ID) or handle
    return UserScope(user_id=str(user_id), handle=handle)


def build_user_key(prefix: str, scope: UserScope) -> str:
    """Return the per-user storage key, e.g. 'schedule:alice@example.com'."""
    return f"{prefix}{const.STORE_KEY_SEPARATOR}{scope.handle}"
