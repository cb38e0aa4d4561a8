"""Tests for ProgramEngine.

Tests cover:
- Schedule shape (66 days, consecutive dates, counters initialized)
- Determinism for a given start date
- Task id uniqueness and format
- Questionnaire normalization and derived goals
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from custom_components.rise_habits import const
from custom_components.rise_habits.catalog import TASK_TEMPLATES
from custom_components.rise_habits.engines.program_engine import ProgramEngine
from tests.helpers import make_utc_dt


class TestGenerateProgram:
    """Tests for generate_program."""

    def test_produces_every_program_day(self) -> None:
        """Exactly 66 entries numbered 1..66."""
        schedule = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1))

        assert len(schedule) == const.PROGRAM_LENGTH_DAYS
        assert [entry["day"] for entry in schedule] == list(range(1, 67))

    def test_dates_are_consecutive_from_start(self) -> None:
        """Day N is dated start + (N - 1) days, across month boundaries."""
        schedule = ProgramEngine.generate_program(make_utc_dt(2024, 1, 30))

        assert schedule[0]["date"] == "2024-01-30"
        assert schedule[1]["date"] == "2024-01-31"
        assert schedule[2]["date"] == "2024-02-01"
        assert schedule[65]["date"] == "2024-04-04"

    def test_start_is_normalized_to_utc_date(self) -> None:
        """A late-evening local instant is dated by its UTC calendar day."""
        start = datetime.fromisoformat("2024-03-30T22:00:00-05:00")
        schedule = ProgramEngine.generate_program(start)

        assert schedule[0]["date"] == "2024-03-31"

    def test_accepts_plain_date(self) -> None:
        """A date start is used as day 1 unchanged."""
        schedule = ProgramEngine.generate_program(date(2024, 6, 1))

        assert schedule[0]["date"] == "2024-06-01"

    def test_counters_start_at_zero(self) -> None:
        """Fresh days have no completions, no streak and a correct total."""
        for entry in ProgramEngine.generate_program(make_utc_dt(2024, 1, 1)):
            assert entry["completed_tasks"] == 0
            assert entry["streak"] == 0
            assert entry["total_tasks"] == len(entry["tasks"]) == 6
            assert not any(task["is_completed"] for task in entry["tasks"])
            assert all("completed_at" not in task for task in entry["tasks"])

    def test_is_deterministic_for_same_date(self) -> None:
        """Two generations on the same calendar day are identical."""
        first = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1, 6))
        second = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1, 18))

        assert first == second

    def test_task_ids_are_unique_and_formatted(self) -> None:
        """Ids follow '{category}-{day}' and never repeat across the program."""
        schedule = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1))
        ids = [task["id"] for entry in schedule for task in entry["tasks"]]

        assert len(ids) == len(set(ids))
        assert schedule[0]["tasks"][0]["id"] == "sleep-1"
        assert schedule[65]["tasks"][4]["id"] == "screenTime-66"

    def test_tasks_follow_catalog_content(self) -> None:
        """Day 15 sleep task comes from the third sleep template."""
        schedule = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1))
        task = schedule[14]["tasks"][0]

        assert task["category"] == const.CATEGORY_SLEEP
        assert task["title"] == "Optimize your sleep environment"
        assert task["difficulty"] == const.DIFFICULTY_MEDIUM
        assert task["estimated_time"] == 15
        assert task["tips"] == [
            "Keep room cool and dark",
            "Use blackout curtains",
            "Remove electronics",
        ]

    def test_tips_are_not_shared(self) -> None:
        """Mutating generated tips never reaches the catalog or other days."""
        schedule = ProgramEngine.generate_program(make_utc_dt(2024, 1, 1))
        schedule[0]["tasks"][0]["tips"].append("extra")

        assert "extra" not in schedule[1]["tasks"][0]["tips"]
        assert "extra" not in TASK_TEMPLATES[0].tips

    def test_custom_length_and_templates(self) -> None:
        """Days without a covering template are still emitted, just empty."""
        schedule = ProgramEngine.generate_program(
            make_utc_dt(2024, 1, 1), templates=TASK_TEMPLATES[:1], length=10
        )

        assert len(schedule) == 10
        assert schedule[6]["total_tasks"] == 1
        assert schedule[7]["tasks"] == []
        assert schedule[7]["total_tasks"] == 0


class TestQuestionnaire:
    """Tests for questionnaire normalization and derived goals."""

    def test_missing_fields_get_defaults(self) -> None:
        """Strings default to '' and numbers to 0."""
        answers = ProgramEngine.normalize_questionnaire(
            {const.DATA_Q_WATER_GOAL: "8 glasses", const.DATA_Q_STRESS_LEVEL: 4}
        )

        assert answers[const.DATA_Q_WATER_GOAL] == "8 glasses"
        assert answers[const.DATA_Q_SLEEP_GOAL] == ""
        assert answers[const.DATA_Q_STRESS_LEVEL] == 4
        assert answers[const.DATA_Q_ENERGY_LEVEL] == 0
        assert answers[const.DATA_Q_EXTRA_TASKS] == []

    def test_none_input(self) -> None:
        """No questionnaire at all still yields every field."""
        answers = ProgramEngine.normalize_questionnaire(None)

        for field in const.QUESTIONNAIRE_TEXT_FIELDS:
            assert answers[field] == ""
        for field in const.QUESTIONNAIRE_NUMBER_FIELDS:
            assert answers[field] == 0

    def test_goals_only_for_answered_categories(self) -> None:
        """One goal per non-empty category answer, with deterministic ids."""
        answers = ProgramEngine.normalize_questionnaire(
            {
                const.DATA_Q_WATER_GOAL: "8 glasses",
                const.DATA_Q_CURRENT_WATER_INTAKE: 3,
                const.DATA_Q_MIND_GOAL: "Meditate daily",
            }
        )
        now_iso = datetime(2024, 1, 1, tzinfo=UTC).isoformat()
        goals = ProgramEngine.build_questionnaire_goals(answers, now_iso)

        assert [goal["id"] for goal in goals] == ["goal-water", "goal-mind"]
        water = goals[0]
        assert water["category"] == const.CATEGORY_WATER
        assert water["target"] == "8 glasses"
        assert water["value"] == "3"
        assert water["is_active"] is True
        assert water["created_at"] == water["updated_at"] == now_iso
