# File: const.py
"""Constants for the Rise Habits integration.

This file centralizes configuration keys, defaults, storage keys, data field
names, service names, signal suffixes and platform identifiers used across
the integration.
"""

import logging
from typing import Final

import homeassistant.util.dt as dt_util
from homeassistant.const import Platform

from .utils import dt_utils


def set_default_timezone(hass):
    """Set the default timezone based on the Home Assistant configuration."""
    global DEFAULT_TIME_ZONE
    DEFAULT_TIME_ZONE = dt_util.get_time_zone(hass.config.time_zone)
    if DEFAULT_TIME_ZONE is not None:
        dt_utils.set_default_timezone(DEFAULT_TIME_ZONE)


# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
RISE_HABITS_TITLE = "Rise Habits"

DOMAIN = "rise_habits"

LOGGER = logging.getLogger(__package__)

PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "rise_habits_data"
STORAGE_VERSION = 1
SCHEMA_VERSION = 1

# Default timezone: initially None, set once hass is available.
DEFAULT_TIME_ZONE = None

# ------------------------------------------------------------------------------------------------
# Program
# ------------------------------------------------------------------------------------------------
PROGRAM_LENGTH_DAYS: Final = 66
FIRST_PROGRAM_DAY: Final = 1

CATEGORY_SLEEP = "sleep"
CATEGORY_WATER = "water"
CATEGORY_EXERCISE = "exercise"
CATEGORY_MIND = "mind"
CATEGORY_SCREEN_TIME = "screenTime"
CATEGORY_SHOWER = "shower"
CATEGORY_CUSTOM = "custom"

HABIT_CATEGORIES: Final = (
    CATEGORY_SLEEP,
    CATEGORY_WATER,
    CATEGORY_EXERCISE,
    CATEGORY_MIND,
    CATEGORY_SCREEN_TIME,
    CATEGORY_SHOWER,
)
GOAL_CATEGORIES: Final = (*HABIT_CATEGORIES, CATEGORY_CUSTOM)

DIFFICULTY_EASY = "easy"
DIFFICULTY_MEDIUM = "medium"
DIFFICULTY_HARD = "hard"
DIFFICULTIES: Final = (DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD)

TASK_ID_FMT = "{category}-{day}"
GOAL_ID_QUESTIONNAIRE_FMT = "goal-{category}"
GOAL_ID_PREFIX = "goal-"

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_USER_HANDLE = "user_handle"
CONF_USER_ID = "user_id"
CONF_USER_NAME = "user_name"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_DAY_CHECK_INTERVAL = "day_check_interval"
CONF_SNAPSHOT_TOP_N = "snapshot_top_n"

# Defaults
DEFAULT_UPDATE_INTERVAL = 5  # minutes
DEFAULT_DAY_CHECK_INTERVAL = 1  # minutes
DEFAULT_SNAPSHOT_TOP_N = 3
DEFAULT_ZERO = 0
DATA_FLOAT_PRECISION = 2

# Config flow steps
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Storage Keys (per-user key-value namespace)
# ------------------------------------------------------------------------------------------------
STORE_KEY_SCHEDULE = "schedule"
STORE_KEY_DAY_PROGRESSION = "dayProgression"
STORE_KEY_GOALS = "goals"
STORE_KEY_QUESTIONNAIRE = "questionnaire"
STORE_KEY_SEPARATOR = ":"

# Top-level storage document
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_META_CREATED_AT = "created_at"
DATA_ENTRIES = "entries"

# ------------------------------------------------------------------------------------------------
# Data Keys
# ------------------------------------------------------------------------------------------------

# TaskTemplate
DATA_TEMPLATE_DAY_RANGE_START = "start"
DATA_TEMPLATE_DAY_RANGE_END = "end"

# Task
DATA_TASK_ID = "id"
DATA_TASK_DAY = "day"
DATA_TASK_CATEGORY = "category"
DATA_TASK_TITLE = "title"
DATA_TASK_DESCRIPTION = "description"
DATA_TASK_DIFFICULTY = "difficulty"
DATA_TASK_ESTIMATED_TIME = "estimated_time"
DATA_TASK_TIPS = "tips"
DATA_TASK_IS_COMPLETED = "is_completed"
DATA_TASK_COMPLETED_AT = "completed_at"

# DailyProgress
DATA_DAY = "day"
DATA_DAY_DATE = "date"
DATA_DAY_TASKS = "tasks"
DATA_DAY_COMPLETED_TASKS = "completed_tasks"
DATA_DAY_TOTAL_TASKS = "total_tasks"
DATA_DAY_STREAK = "streak"
DATA_DAY_NOTES = "notes"

# DayProgressionState
DATA_PROGRESSION_CURRENT_DAY = "current_day"
DATA_PROGRESSION_LAST_MIDNIGHT_CHECK = "last_midnight_check"
DATA_PROGRESSION_IS_NEW_DAY = "is_new_day"

# Goal
DATA_GOAL_ID = "id"
DATA_GOAL_TITLE = "title"
DATA_GOAL_DESCRIPTION = "description"
DATA_GOAL_CATEGORY = "category"
DATA_GOAL_VALUE = "value"
DATA_GOAL_TARGET = "target"
DATA_GOAL_IS_ACTIVE = "is_active"
DATA_GOAL_CREATED_AT = "created_at"
DATA_GOAL_UPDATED_AT = "updated_at"

# QuestionnaireResponse
DATA_Q_SLEEP_GOAL = "sleep_goal"
DATA_Q_WATER_GOAL = "water_goal"
DATA_Q_EXERCISE_GOAL = "exercise_goal"
DATA_Q_MIND_GOAL = "mind_goal"
DATA_Q_SCREEN_TIME_GOAL = "screen_time_goal"
DATA_Q_SHOWER_GOAL = "shower_goal"
DATA_Q_WAKE_UP_TIME = "wake_up_time"
DATA_Q_BED_TIME = "bed_time"
DATA_Q_CURRENT_WATER_INTAKE = "current_water_intake"
DATA_Q_CURRENT_EXERCISE_MINUTES = "current_exercise_minutes"
DATA_Q_CURRENT_SCREEN_TIME_HOURS = "current_screen_time_hours"
DATA_Q_STRESS_LEVEL = "stress_level"
DATA_Q_ENERGY_LEVEL = "energy_level"
DATA_Q_MOTIVATION_LEVEL = "motivation_level"
DATA_Q_EXTRA_TASKS = "extra_tasks"

QUESTIONNAIRE_TEXT_FIELDS: Final = (
    DATA_Q_SLEEP_GOAL,
    DATA_Q_WATER_GOAL,
    DATA_Q_EXERCISE_GOAL,
    DATA_Q_MIND_GOAL,
    DATA_Q_SCREEN_TIME_GOAL,
    DATA_Q_SHOWER_GOAL,
    DATA_Q_WAKE_UP_TIME,
    DATA_Q_BED_TIME,
)
QUESTIONNAIRE_NUMBER_FIELDS: Final = (
    DATA_Q_CURRENT_WATER_INTAKE,
    DATA_Q_CURRENT_EXERCISE_MINUTES,
    DATA_Q_CURRENT_SCREEN_TIME_HOURS,
    DATA_Q_STRESS_LEVEL,
    DATA_Q_ENERGY_LEVEL,
    DATA_Q_MOTIVATION_LEVEL,
)

# HabitStats
DATA_STATS_CATEGORY = "category"
DATA_STATS_TOTAL_COMPLETED = "total_completed"
DATA_STATS_CURRENT_STREAK = "current_streak"
DATA_STATS_LONGEST_STREAK = "longest_streak"
DATA_STATS_COMPLETION_RATE = "completion_rate"
DATA_STATS_LAST_COMPLETED = "last_completed"

# Snapshot
DATA_SNAPSHOT_CURRENT_DAY = "current_day"
DATA_SNAPSHOT_DATE = "date"
DATA_SNAPSHOT_COMPLETED_HABITS = "completed_habits"
DATA_SNAPSHOT_TOTAL_HABITS = "total_habits"
DATA_SNAPSHOT_TOP_TASKS = "top_tasks"

# Coordinator data payload
DATA_COORD_PROGRAM_GENERATED = "program_generated"
DATA_COORD_CURRENT_DAY = "current_day"
DATA_COORD_SNAPSHOT = "snapshot"
DATA_COORD_STATS = "stats"
DATA_COORD_GOALS = "goals"
DATA_COORD_ACTIVE_GOALS = "active_goals"
DATA_COORD_QUESTIONNAIRE = "questionnaire"

# ------------------------------------------------------------------------------------------------
# Signals (instance-scoped dispatcher suffixes)
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_PROGRAM_GENERATED = "program_generated"
SIGNAL_SUFFIX_PROGRAM_CLEARED = "program_cleared"
SIGNAL_SUFFIX_TASK_COMPLETED = "task_completed"
SIGNAL_SUFFIX_TASK_UNCOMPLETED = "task_uncompleted"
SIGNAL_SUFFIX_NEW_DAY = "new_day"
SIGNAL_SUFFIX_DAY_RESET = "day_reset"
SIGNAL_SUFFIX_GOALS_CHANGED = "goals_changed"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_GENERATE_PROGRAM = "generate_program"
SERVICE_CLEAR_PROGRAM = "clear_program"
SERVICE_COMPLETE_TASK = "complete_task"
SERVICE_UNCOMPLETE_TASK = "uncomplete_task"
SERVICE_SET_DAY_NOTES = "set_day_notes"
SERVICE_CHECK_NEW_DAY = "check_new_day"
SERVICE_ACKNOWLEDGE_NEW_DAY = "acknowledge_new_day"
SERVICE_ADVANCE_DAY = "advance_day"
SERVICE_RESET_DAY_PROGRESSION = "reset_day_progression"
SERVICE_ADD_GOAL = "add_goal"
SERVICE_UPDATE_GOAL = "update_goal"
SERVICE_DELETE_GOAL = "delete_goal"
SERVICE_TOGGLE_GOAL = "toggle_goal"

ALL_SERVICES: Final = (
    SERVICE_GENERATE_PROGRAM,
    SERVICE_CLEAR_PROGRAM,
    SERVICE_COMPLETE_TASK,
    SERVICE_UNCOMPLETE_TASK,
    SERVICE_SET_DAY_NOTES,
    SERVICE_CHECK_NEW_DAY,
    SERVICE_ACKNOWLEDGE_NEW_DAY,
    SERVICE_ADVANCE_DAY,
    SERVICE_RESET_DAY_PROGRESSION,
    SERVICE_ADD_GOAL,
    SERVICE_UPDATE_GOAL,
    SERVICE_DELETE_GOAL,
    SERVICE_TOGGLE_GOAL,
)

# Service fields
FIELD_CONFIG_ENTRY_ID = "config_entry_id"
FIELD_DAY = "day"
FIELD_TASK_ID = "task_id"
FIELD_NOTES = "notes"
FIELD_QUESTIONNAIRE = "questionnaire"
FIELD_GOAL_ID = "goal_id"
FIELD_GOAL_TITLE = "title"
FIELD_GOAL_DESCRIPTION = "description"
FIELD_GOAL_CATEGORY = "category"
FIELD_GOAL_VALUE = "value"
FIELD_GOAL_TARGET = "target"
FIELD_GOAL_IS_ACTIVE = "is_active"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_CURRENT_DAY = "_current_day"
SENSOR_UID_SUFFIX_TODAY = "_today_progress"
SENSOR_UID_SUFFIX_HABIT_STATS = "_habit_stats"
SENSOR_UID_SUFFIX_GOALS = "_goals"

TRANS_KEY_SENSOR_CURRENT_DAY = "current_day_sensor"
TRANS_KEY_SENSOR_TODAY = "today_progress_sensor"
TRANS_KEY_SENSOR_HABIT_STATS = "habit_stats_sensor"
TRANS_KEY_SENSOR_GOALS = "goals_sensor"
TRANS_KEY_SENSOR_ATTR_CATEGORY = "category"

ATTR_DESCRIPTION = "description"
ATTR_USER_HANDLE = "user_handle"
ATTR_PROGRAM_LENGTH = "program_length"
ATTR_PROGRAM_GENERATED = "program_generated"
ATTR_IS_NEW_DAY = "is_new_day"
ATTR_DATE = "date"
ATTR_TOP_TASKS = "top_tasks"
ATTR_COMPLETED_HABITS = "completed_habits"
ATTR_TOTAL_HABITS = "total_habits"
ATTR_GOALS = "goals"
ATTR_TOTAL_GOALS = "total_goals"
ATTR_QUESTIONNAIRE = "questionnaire"

# ------------------------------------------------------------------------------------------------
# Errors / Messages
# ------------------------------------------------------------------------------------------------
ERROR_NO_ACTIVE_USER = "No active user is configured for this program"
ERROR_DAY_NOT_FOUND_FMT = "Day {} not found in program"
ERROR_TASK_NOT_FOUND_FMT = "Task '{}' not found on day {}"
ERROR_GOAL_NOT_FOUND_FMT = "Goal '{}' not found"
ERROR_PERSISTENCE_FMT = "Failed to persist '{}'"
ERROR_ALREADY_CONFIGURED = "already_configured"
ERROR_INVALID_HANDLE = "invalid_handle"
MSG_NO_ENTRY_FOUND = "No Rise Habits entry found"
