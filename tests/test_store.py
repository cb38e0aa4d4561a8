"""Direct unit tests for RiseHabitsStore.

Tests the key-value contract used by every manager: default structure,
deep-copy isolation, durability, and rollback when a save fails.
"""

# pylint: disable=protected-access  # Accessing _store for testing
# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names
# pylint: disable=unused-argument  # Test fixtures may be unused in simple tests

from unittest.mock import AsyncMock, patch

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

from custom_components.rise_habits import const
from custom_components.rise_habits.errors import PersistenceError
from custom_components.rise_habits.store import RiseHabitsStore


@pytest.fixture
def rh_store(hass: HomeAssistant) -> RiseHabitsStore:
    """Return an uninitialized store."""
    return RiseHabitsStore(hass, "rise_habits_unit")


async def test_async_initialize_creates_default_structure(
    hass: HomeAssistant,
    rh_store: RiseHabitsStore,
) -> None:
    """Test that async_initialize creates default structure when no data exists."""
    with patch.object(rh_store._store, "async_load", return_value=None):
        await rh_store.async_initialize()

    data = rh_store.data
    assert data[const.DATA_ENTRIES] == {}
    assert data[const.DATA_META][const.DATA_META_SCHEMA_VERSION] == const.SCHEMA_VERSION
    assert const.DATA_META_CREATED_AT in data[const.DATA_META]


async def test_async_initialize_loads_existing_data(
    hass: HomeAssistant,
    rh_store: RiseHabitsStore,
) -> None:
    """Test that async_initialize keeps existing storage data."""
    existing_data = {
        const.DATA_META: {const.DATA_META_SCHEMA_VERSION: 1},
        const.DATA_ENTRIES: {"goals:alice@example.com": []},
    }

    with patch.object(rh_store._store, "async_load", return_value=existing_data):
        await rh_store.async_initialize()

    assert rh_store.data == existing_data
    assert await rh_store.async_get("goals:alice@example.com") == []


@pytest.mark.parametrize("loaded", [[], "corrupt", {"entries": "nope"}])
async def test_async_initialize_replaces_unexpected_layout(
    hass: HomeAssistant,
    rh_store: RiseHabitsStore,
    loaded: object,
) -> None:
    """Test that an unreadable document is replaced by the default structure."""
    with patch.object(rh_store._store, "async_load", return_value=loaded):
        await rh_store.async_initialize()

    assert rh_store.entries == {}


async def test_get_missing_key_returns_none(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that reading an unknown key never raises."""
    assert await store.async_get("schedule:nobody") is None


async def test_get_returns_isolated_copy(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that mutating a read or the written value does not reach the cache."""
    value = {"current_day": 1}
    await store.async_set("dayProgression:alice", value)
    value["current_day"] = 99

    first = await store.async_get("dayProgression:alice")
    first["current_day"] = 50

    assert await store.async_get("dayProgression:alice") == {"current_day": 1}


async def test_set_persists_document(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that a successful write saves the full document once."""
    mock_save = AsyncMock()
    with patch.object(store._store, "async_save", mock_save):
        await store.async_set("goals:alice", [{"id": "goal-1"}])

    mock_save.assert_awaited_once()
    saved = mock_save.call_args.args[0]
    assert saved[const.DATA_ENTRIES]["goals:alice"] == [{"id": "goal-1"}]


@pytest.mark.parametrize(
    "failure",
    [OSError("disk full"), TypeError("not serializable"), HomeAssistantError("boom")],
)
async def test_set_failure_restores_previous_value(
    hass: HomeAssistant, store: RiseHabitsStore, failure: Exception
) -> None:
    """Test that a failed save raises PersistenceError and keeps the old value."""
    await store.async_set("goals:alice", ["old"])

    with (
        patch.object(store._store, "async_save", side_effect=failure),
        pytest.raises(PersistenceError) as exc_info,
    ):
        await store.async_set("goals:alice", ["new"])

    assert exc_info.value.key == "goals:alice"
    assert await store.async_get("goals:alice") == ["old"]


async def test_set_failure_on_new_key_leaves_it_absent(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that a key first written by a failed save does not appear."""
    with (
        patch.object(store._store, "async_save", side_effect=OSError("read-only")),
        pytest.raises(PersistenceError),
    ):
        await store.async_set("schedule:alice", [])

    assert "schedule:alice" not in store.entries


async def test_remove_deletes_key(hass: HomeAssistant, store: RiseHabitsStore) -> None:
    """Test that removing a key deletes it and unknown keys are ignored."""
    await store.async_set("schedule:alice", [1])

    await store.async_remove("schedule:alice")
    await store.async_remove("schedule:alice")

    assert await store.async_get("schedule:alice") is None


async def test_remove_failure_restores_value(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that a failed removal keeps the value in memory."""
    await store.async_set("schedule:alice", [1])

    with (
        patch.object(store._store, "async_save", side_effect=OSError("io")),
        pytest.raises(PersistenceError),
    ):
        await store.async_remove("schedule:alice")

    assert await store.async_get("schedule:alice") == [1]


async def test_set_many_saves_once(hass: HomeAssistant, store: RiseHabitsStore) -> None:
    """Test that several writes and a removal share one save."""
    await store.async_set("schedule:alice", [1])

    mock_save = AsyncMock()
    with patch.object(store._store, "async_save", mock_save):
        await store.async_set_many(
            {"goals:alice": ["g"], "dayProgression:alice": {"current_day": 1}},
            remove=["schedule:alice"],
        )

    mock_save.assert_awaited_once()
    assert store.entries == {
        "goals:alice": ["g"],
        "dayProgression:alice": {"current_day": 1},
    }


async def test_set_many_failure_restores_every_key(
    hass: HomeAssistant, store: RiseHabitsStore
) -> None:
    """Test that a failed save rolls back all writes and removals."""
    await store.async_set("schedule:alice", [1])
    await store.async_set("goals:alice", ["old"])

    with (
        patch.object(store._store, "async_save", side_effect=OSError("disk full")),
        pytest.raises(PersistenceError),
    ):
        await store.async_set_many(
            {"goals:alice": ["new"], "questionnaire:alice": {}},
            remove=["schedule:alice"],
        )

    assert store.entries == {"schedule:alice": [1], "goals:alice": ["old"]}


async def test_async_delete_storage(hass: HomeAssistant, store: RiseHabitsStore) -> None:
    """Test that deleting the file resets memory and calls remove."""
    await store.async_set("goals:alice", [])

    mock_remove = AsyncMock()
    with patch.object(store._store, "async_remove", mock_remove):
        await store.async_delete_storage()

    mock_remove.assert_awaited_once()
    assert store.entries == {}


async def test_async_delete_storage_logs_os_error(
    hass: HomeAssistant, store: RiseHabitsStore, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that a failed file removal is logged, not raised."""
    with patch.object(store._store, "async_remove", side_effect=OSError("denied")):
        await store.async_delete_storage()

    assert "Failed to remove storage file" in caplog.text


async def test_get_storage_path(hass: HomeAssistant, rh_store: RiseHabitsStore) -> None:
    """Test that the storage path ends with the storage key."""
    assert rh_store.get_storage_path().endswith("rise_habits_unit")
