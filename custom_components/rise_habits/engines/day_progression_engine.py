"""Day Progression Engine - Pure logic for calendar-day boundary detection.

A new day is detected when the local calendar date (year, month, day) of
"now" differs from the one of the last check. A crossing advances the day
counter by exactly one, however many days actually elapsed.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
The clock and timezone are passed in; DayProgressionManager supplies them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_to_utc, is_same_local_day

if TYPE_CHECKING:
    from datetime import datetime
    from zoneinfo import ZoneInfo

    from ..type_defs import DayProgressionData


class DayProgressionEngine:
    """Pure logic engine for the per-user day cursor."""

    @staticmethod
    def default_state(now: datetime) -> DayProgressionData:
        """Return the state of a user who has never been checked."""
        return {
            const.DATA_PROGRESSION_CURRENT_DAY: const.FIRST_PROGRAM_DAY,
            const.DATA_PROGRESSION_LAST_MIDNIGHT_CHECK: now.isoformat(),
        }

    @staticmethod
    def normalize_state(raw: object, now: datetime) -> DayProgressionData:
        """Coerce a stored value into a valid state.

        Anything unreadable falls back to the default state anchored at now. A
        day below 1 is clamped to 1; an unparsable timestamp is replaced by now.
        """
        if not isinstance(raw, dict):
            return DayProgressionEngine.default_state(now)

        current_day = raw.get(const.DATA_PROGRESSION_CURRENT_DAY)
        if not isinstance(current_day, int) or isinstance(current_day, bool):
            current_day = const.FIRST_PROGRAM_DAY
        current_day = max(current_day, const.FIRST_PROGRAM_DAY)

        last_check = raw.get(const.DATA_PROGRESSION_LAST_MIDNIGHT_CHECK)
        if dt_to_utc(last_check) is None:
            last_check = now.isoformat()

        return {
            const.DATA_PROGRESSION_CURRENT_DAY: current_day,
            const.DATA_PROGRESSION_LAST_MIDNIGHT_CHECK: last_check,
        }

    @staticmethod
    def is_new_calendar_day(
        last_check: datetime, now: datetime, tz: ZoneInfo | None = None
    ) -> bool:
        """Return True when now falls on a different local date than last_check."""
        return not is_same_local_day(last_check, now, tz)

    @staticmethod
    def check_new_day(
        state: DayProgressionData, now: datetime, tz: ZoneInfo | None = None
    ) -> tuple[DayProgressionData, bool]:
        """Evaluate one day-boundary check.

        Returns:
            (new_state, is_new_day). When no boundary was crossed the original
            state is returned unchanged, including ``last_midnight_check``.

        Example:
            last check 2024-01-01T23:00Z, now 2024-01-02T00:30Z (UTC) → day + 1
            last check 2024-01-02T00:30Z, now 2024-01-02T00:45Z (UTC) → unchanged
        """
        last_check = dt_to_utc(state[const.DATA_PROGRESSION_LAST_MIDNIGHT_CHECK])
        if last_check is not None and not DayProgressionEngine.is_new_calendar_day(
            last_check, now, tz
        ):
            return state, False

        return DayProgressionEngine.advance(state, now), True

    @staticmethod
    def advance(state: DayProgressionData, now: datetime) -> DayProgressionData:
        """Advance the day counter by one and stamp the check time."""
        return {
            const.DATA_PROGRESSION_CURRENT_DAY: state[
                const.DATA_PROGRESSION_CURRENT_DAY
            ]
            + 1,
            const.DATA_PROGRESSION_LAST_MIDNIGHT_CHECK: now.isoformat(),
        }

    @staticmethod
    def reset(now: datetime) -> DayProgressionData:
        """Return the state for a program restarted at day 1."""
        return DayProgressionEngine.default_state(now)
