"""Base manager class for Rise Habits managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import (
    async_dispatcher_connect,
    async_dispatcher_send,
)

from .. import const
from ..errors import NoActiveUserError
from ..rh_helpers import build_user_key, get_event_signal

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable
    from datetime import datetime

    from homeassistant.core import HomeAssistant

    from ..coordinator import RiseHabitsDataCoordinator
    from ..store import RiseHabitsStore
    from ..type_defs import UserScope


class BaseManager(ABC):
    """Base class for all Rise Habits managers with scoped event support.

    Provides:
    - Instance-scoped event emitting (emit)
    - Instance-scoped event listening (listen)
    - Access to the shared store, clock and per-user write lock

    Data Persistence:
    - Every read-modify-persist cycle runs inside ``self.user_lock(scope)``
    - Methods documented as "caller holds the user lock" never take it
      themselves, so they can be composed inside another locked workflow

    Subclasses must implement:
    - async_setup(): Subscribe to events, initialize state
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: RiseHabitsDataCoordinator
    ) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator managing this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    @property
    def store(self) -> RiseHabitsStore:
        """Return the key-value store shared by all managers."""
        return self.coordinator.store

    def now(self) -> datetime:
        """Read the coordinator clock (UTC, timezone-aware)."""
        return self.coordinator.clock()

    def user_lock(self, scope: UserScope) -> asyncio.Lock:
        """Return the write lock serializing this user's read-modify-persist cycles."""
        return self.coordinator.get_user_lock(scope)

    @staticmethod
    def require_scope(scope: UserScope | None) -> UserScope:
        """Return scope, or raise NoActiveUserError when no user is resolved."""
        if scope is None:
            raise NoActiveUserError
        return scope

    @staticmethod
    def user_key(prefix: str, scope: UserScope) -> str:
        """Return the per-user storage key for a document prefix."""
        return build_user_key(prefix, scope)

    def emit(self, suffix: str, **payload: Any) -> None:
        """Emit instance-scoped event to other managers and entities.

        Args:
            suffix: Signal suffix constant (e.g., const.SIGNAL_SUFFIX_NEW_DAY)
            **payload: Event data dict passed to listeners (must be JSON-serializable)

        Example:
            self.emit(
                const.SIGNAL_SUFFIX_TASK_COMPLETED,
                handle="alice@example.com",
                day=3,
                task_id="water-3",
            )
        """
        signal = get_event_signal(self.entry_id, suffix)
        const.LOGGER.debug(
            "Emitting event '%s' for instance %s with payload keys: %s",
            suffix,
            self.entry_id,
            list(payload.keys()),
        )
        # Pass payload as single dict argument (dispatcher only supports *args)
        async_dispatcher_send(self.hass, signal, payload)

    def listen(self, suffix: str, callback: Callable[..., Any]) -> None:
        """Subscribe to instance-scoped event with automatic cleanup.

        The subscription is removed when the config entry is unloaded. The
        callback receives the payload dict and may be sync or async.
        """
        signal = get_event_signal(self.entry_id, suffix)
        unsub = async_dispatcher_connect(self.hass, signal, callback)
        self.coordinator.config_entry.async_on_unload(unsub)
        const.LOGGER.debug(
            "Manager %s listening to event '%s' for instance %s",
            self.__class__.__name__,
            suffix,
            self.entry_id,
        )

    @abstractmethod
    async def async_setup(self) -> None:
        """Set up the manager (subscribe to events, initialize state).

        Called once during coordinator initialization.
        """
