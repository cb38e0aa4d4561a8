# File: managers/program_manager.py
"""Program Manager for Rise Habits integration.

Generates and clears the 66-day program of a user.

Generation workflow (single locked cycle, one save):
1. Normalize the questionnaire ('questionnaire:{handle}')
2. Expand the catalog into the schedule ('schedule:{handle}').
   An existing schedule is overwritten; the overwrite is logged.
3. Reset the day cursor to day 1 anchored at the generation time
4. Upsert the goals derived from the questionnaire

Signals Emitted:
- SIGNAL_SUFFIX_PROGRAM_GENERATED
- SIGNAL_SUFFIX_PROGRAM_CLEARED
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.day_progression_engine import DayProgressionEngine
from ..engines.program_engine import ProgramEngine
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import DailyProgressData, QuestionnaireData, UserScope


class ProgramManager(BaseManager):
    """Owns schedule generation, lookup and removal."""

    async def async_setup(self) -> None:
        """Set up the program manager (no subscriptions)."""

    async def async_get_schedule(
        self, scope: UserScope | None
    ) -> list[DailyProgressData] | None:
        """Return the user's schedule, or None when there is none to read."""
        if scope is None:
            return None
        raw = await self.store.async_get(self.user_key(const.STORE_KEY_SCHEDULE, scope))
        if raw is None:
            return None
        if not isinstance(raw, list):
            const.LOGGER.warning(
                "WARNING: Ignoring malformed schedule for '%s'", scope.handle
            )
            return None
        return raw

    async def async_get_questionnaire(
        self, scope: UserScope | None
    ) -> QuestionnaireData | None:
        """Return the stored questionnaire answers, if any."""
        if scope is None:
            return None
        return await self.store.async_get(
            self.user_key(const.STORE_KEY_QUESTIONNAIRE, scope)
        )

    async def async_generate_program(
        self,
        scope: UserScope | None,
        questionnaire: dict[str, Any] | None = None,
    ) -> list[DailyProgressData]:
        """Generate, persist and return a fresh 66-day program.

        Raises:
            NoActiveUserError: No user is resolved (nothing is written)
            PersistenceError: The store rejected a write
        """
        scope = self.require_scope(scope)
        answers = ProgramEngine.normalize_questionnaire(questionnaire)

        async with self.user_lock(scope):
            now = self.now()
            schedule = ProgramEngine.generate_program(now)
            schedule_key = self.user_key(const.STORE_KEY_SCHEDULE, scope)

            if await self.store.async_get(schedule_key) is not None:
                const.LOGGER.warning(
                    "WARNING: Overwriting existing program for '%s'; "
                    "previous progress is discarded",
                    scope.handle,
                )

            goals = await self.coordinator.goal_manager.async_build_merged_goals(
                scope,
                ProgramEngine.build_questionnaire_goals(answers, now.isoformat()),
            )
            # Single save: all four documents change together or not at all
            await self.store.async_set_many(
                {
                    self.user_key(const.STORE_KEY_QUESTIONNAIRE, scope): answers,
                    schedule_key: schedule,
                    self.user_key(
                        const.STORE_KEY_DAY_PROGRESSION, scope
                    ): DayProgressionEngine.reset(now),
                    self.user_key(const.STORE_KEY_GOALS, scope): goals,
                }
            )

        start_date = schedule[0][const.DATA_DAY_DATE] if schedule else None
        const.LOGGER.info(
            "INFO: Generated %s-day program for '%s' starting %s",
            len(schedule),
            scope.handle,
            start_date,
        )
        self.emit(
            const.SIGNAL_SUFFIX_PROGRAM_GENERATED,
            handle=scope.handle,
            start_date=start_date,
            days=len(schedule),
        )
        return schedule

    async def async_clear_program(self, scope: UserScope | None) -> None:
        """Delete the schedule and put the day cursor back on day 1.

        Goals and questionnaire answers are kept.

        Raises:
            NoActiveUserError: No user is resolved
            PersistenceError: The store rejected a write
        """
        scope = self.require_scope(scope)
        async with self.user_lock(scope):
            await self.store.async_set_many(
                {
                    self.user_key(
                        const.STORE_KEY_DAY_PROGRESSION, scope
                    ): DayProgressionEngine.reset(self.now()),
                },
                remove=[self.user_key(const.STORE_KEY_SCHEDULE, scope)],
            )

        const.LOGGER.warning("WARNING: Cleared program for '%s'", scope.handle)
        self.emit(const.SIGNAL_SUFFIX_PROGRAM_CLEARED, handle=scope.handle)
