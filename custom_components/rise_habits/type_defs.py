"""Type definitions for Rise Habits data structures.

TypedDicts describe the JSON-equivalent documents persisted through the
key-value store (schedule, day progression, goals, questionnaire) and the
derived, non-persisted results (habit stats, snapshot).

TaskTemplate is a frozen dataclass instead: it is compiled-in catalog data,
never persisted, and must not be mutated by the generator.

IMPORTANT: This file must NOT import from coordinator.py, managers, or any
file that imports coordinator, to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime checks (.get() defaults,
missing-key handling) remain in engines and managers.
"""

from dataclasses import dataclass
from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

HabitCategory = Literal["sleep", "water", "exercise", "mind", "screenTime", "shower"]
Difficulty = Literal["easy", "medium", "hard"]
TaskId = str  # "{category}-{day}"
GoalId = str
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"


# =============================================================================
# Static Catalog
# =============================================================================


@dataclass(frozen=True, slots=True)
class DayRange:
    """Inclusive, 1-based range of program days."""

    start: int
    end: int

    def contains(self, day: int) -> bool:
        """Return True if the day falls inside the range."""
        return self.start <= day <= self.end


@dataclass(frozen=True, slots=True)
class TaskTemplate:
    """Immutable catalog entry that materializes into one task per covered day."""

    category: HabitCategory
    title: str
    description: str
    difficulty: Difficulty
    estimated_time: int  # minutes
    tips: tuple[str, ...]
    day_range: DayRange


# =============================================================================
# User Scope
# =============================================================================


@dataclass(frozen=True, slots=True)
class UserScope:
    """Resolved identity of the user that owns a program.

    All per-user storage keys are namespaced by ``handle``.
    """

    user_id: str
    handle: str


# =============================================================================
# Persisted Documents
# =============================================================================


class TaskData(TypedDict):
    """A materialized task owned by exactly one DailyProgress entry."""

    id: TaskId
    day: int
    category: HabitCategory
    title: str
    description: str
    difficulty: Difficulty
    estimated_time: int
    tips: list[str]
    is_completed: bool
    completed_at: NotRequired[ISODatetime]


class DailyProgressData(TypedDict):
    """One day of the program.

    completed_tasks == count(tasks where is_completed)
    total_tasks == len(tasks)
    """

    day: int
    date: ISODate
    tasks: list[TaskData]
    completed_tasks: int
    total_tasks: int
    streak: int
    notes: NotRequired[str]


class DayProgressionData(TypedDict):
    """Persisted day cursor. is_new_day is transient and never stored."""

    current_day: int
    last_midnight_check: ISODatetime


class GoalData(TypedDict):
    """User-declared target, independent of the day schedule."""

    id: GoalId
    title: str
    description: str
    category: str  # habit category or "custom"
    value: str
    target: str
    is_active: bool
    created_at: ISODatetime
    updated_at: ISODatetime


class QuestionnaireData(TypedDict):
    """Onboarding answers; feed the goal records created with a program."""

    sleep_goal: str
    water_goal: str
    exercise_goal: str
    mind_goal: str
    screen_time_goal: str
    shower_goal: str
    wake_up_time: str
    bed_time: str
    current_water_intake: float
    current_exercise_minutes: float
    current_screen_time_hours: float
    stress_level: int
    energy_level: int
    motivation_level: int
    extra_tasks: NotRequired[list[str]]


# =============================================================================
# Derived Results (not persisted)
# =============================================================================


class DayCheckResult(TypedDict):
    """Outcome of one day-boundary check."""

    is_new_day: bool
    current_day: int


class HabitStatsData(TypedDict):
    """Lifetime statistics for one habit category."""

    category: HabitCategory
    total_completed: int
    current_streak: int
    longest_streak: int
    completion_rate: float
    last_completed: ISODate | None


class SnapshotData(TypedDict):
    """Read-only projection of the current day for widgets and sensors."""

    current_day: int
    date: ISODate | None
    completed_habits: int
    total_habits: int
    top_tasks: list[str]
