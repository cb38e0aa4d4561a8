"""Program Engine - Pure logic for materializing the 66-day schedule.

This engine expands the static template catalog into concrete DailyProgress
entries, and derives goal records from questionnaire answers.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
Persistence and logging belong in ProgramManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..catalog import TASK_TEMPLATES, templates_for_day
from ..utils.dt_utils import dt_program_date

if TYPE_CHECKING:
    from datetime import date, datetime

    from ..type_defs import (
        DailyProgressData,
        GoalData,
        QuestionnaireData,
        TaskData,
        TaskTemplate,
    )


# Questionnaire field carrying the free-text goal of each habit category
_QUESTIONNAIRE_GOAL_FIELDS: dict[str, str] = {
    const.CATEGORY_SLEEP: const.DATA_Q_SLEEP_GOAL,
    const.CATEGORY_WATER: const.DATA_Q_WATER_GOAL,
    const.CATEGORY_EXERCISE: const.DATA_Q_EXERCISE_GOAL,
    const.CATEGORY_MIND: const.DATA_Q_MIND_GOAL,
    const.CATEGORY_SCREEN_TIME: const.DATA_Q_SCREEN_TIME_GOAL,
    const.CATEGORY_SHOWER: const.DATA_Q_SHOWER_GOAL,
}

# Questionnaire field describing the user's current baseline, if any
_QUESTIONNAIRE_BASELINE_FIELDS: dict[str, str] = {
    const.CATEGORY_SLEEP: const.DATA_Q_BED_TIME,
    const.CATEGORY_WATER: const.DATA_Q_CURRENT_WATER_INTAKE,
    const.CATEGORY_EXERCISE: const.DATA_Q_CURRENT_EXERCISE_MINUTES,
    const.CATEGORY_SCREEN_TIME: const.DATA_Q_CURRENT_SCREEN_TIME_HOURS,
}

_GOAL_TITLES: dict[str, str] = {
    const.CATEGORY_SLEEP: "Sleep goal",
    const.CATEGORY_WATER: "Hydration goal",
    const.CATEGORY_EXERCISE: "Exercise goal",
    const.CATEGORY_MIND: "Mind goal",
    const.CATEGORY_SCREEN_TIME: "Screen time goal",
    const.CATEGORY_SHOWER: "Shower goal",
}


class ProgramEngine:
    """Pure logic engine for schedule generation.

    All methods are static - no instance state.
    """

    @staticmethod
    def build_task(template: TaskTemplate, day: int) -> TaskData:
        """Materialize one template into the task for a given day.

        Tips are copied into a fresh list so persisted tasks never alias the
        immutable catalog.
        """
        return {
            const.DATA_TASK_ID: const.TASK_ID_FMT.format(
                category=template.category, day=day
            ),
            const.DATA_TASK_DAY: day,
            const.DATA_TASK_CATEGORY: template.category,
            const.DATA_TASK_TITLE: template.title,
            const.DATA_TASK_DESCRIPTION: template.description,
            const.DATA_TASK_DIFFICULTY: template.difficulty,
            const.DATA_TASK_ESTIMATED_TIME: template.estimated_time,
            const.DATA_TASK_TIPS: list(template.tips),
            const.DATA_TASK_IS_COMPLETED: False,
        }  # type: ignore[return-value]

    @staticmethod
    def generate_program(
        start: datetime | date,
        templates: tuple[TaskTemplate, ...] = TASK_TEMPLATES,
        length: int = const.PROGRAM_LENGTH_DAYS,
    ) -> list[DailyProgressData]:
        """Expand the template catalog into the full day-by-day schedule.

        For every day 1..length, each template whose range contains the day
        contributes one task, in catalog order. The result depends only on the
        calendar date of ``start`` and the catalog.

        Args:
            start: Generation instant (or date). Day 1 is its UTC calendar date.
            templates: Ordered template catalog
            length: Number of program days

        Returns:
            List of DailyProgress dicts indexed by ``day - 1``.

        Example:
            >>> program = ProgramEngine.generate_program(datetime(2024, 1, 1, tzinfo=UTC))
            >>> program[0]["tasks"][0]["id"]
            'sleep-1'
        """
        schedule: list[DailyProgressData] = []
        for day in range(const.FIRST_PROGRAM_DAY, length + 1):
            tasks = [
                ProgramEngine.build_task(template, day)
                for template in templates_for_day(day, templates)
            ]
            schedule.append(
                {
                    const.DATA_DAY: day,
                    const.DATA_DAY_DATE: dt_program_date(start, day),
                    const.DATA_DAY_TASKS: tasks,
                    const.DATA_DAY_COMPLETED_TASKS: 0,
                    const.DATA_DAY_TOTAL_TASKS: len(tasks),
                    const.DATA_DAY_STREAK: 0,
                }  # type: ignore[typeddict-item]
            )
        return schedule

    @staticmethod
    def normalize_questionnaire(raw: dict[str, Any] | None) -> QuestionnaireData:
        """Fill every questionnaire field, defaulting strings to '' and numbers to 0."""
        raw = raw or {}
        result: dict[str, Any] = {}
        for field in const.QUESTIONNAIRE_TEXT_FIELDS:
            value = raw.get(field)
            result[field] = "" if value is None else str(value)
        for field in const.QUESTIONNAIRE_NUMBER_FIELDS:
            value = raw.get(field)
            result[field] = value if isinstance(value, (int, float)) else 0
        result[const.DATA_Q_EXTRA_TASKS] = [
            str(task) for task in raw.get(const.DATA_Q_EXTRA_TASKS) or [] if task
        ]
        return result  # type: ignore[return-value]

    @staticmethod
    def build_questionnaire_goals(
        questionnaire: QuestionnaireData, now_iso: str
    ) -> list[GoalData]:
        """Derive one goal record per habit category with a non-empty answer.

        Goal ids are deterministic (``goal-{category}``) so regenerating a
        program updates these records instead of duplicating them.
        """
        goals: list[GoalData] = []
        for category in const.HABIT_CATEGORIES:
            target = questionnaire.get(_QUESTIONNAIRE_GOAL_FIELDS[category], "")
            if not target:
                continue
            baseline_field = _QUESTIONNAIRE_BASELINE_FIELDS.get(category)
            baseline = questionnaire.get(baseline_field, "") if baseline_field else ""
            goals.append(
                {
                    const.DATA_GOAL_ID: const.GOAL_ID_QUESTIONNAIRE_FMT.format(
                        category=category
                    ),
                    const.DATA_GOAL_TITLE: _GOAL_TITLES[category],
                    const.DATA_GOAL_DESCRIPTION: "",
                    const.DATA_GOAL_CATEGORY: category,
                    const.DATA_GOAL_VALUE: str(baseline),
                    const.DATA_GOAL_TARGET: str(target),
                    const.DATA_GOAL_IS_ACTIVE: True,
                    const.DATA_GOAL_CREATED_AT: now_iso,
                    const.DATA_GOAL_UPDATED_AT: now_iso,
                }  # type: ignore[typeddict-item]
            )
        return goals
