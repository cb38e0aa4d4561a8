"""Manager modules for Rise Habits integration.

Managers orchestrate workflows and coordinate between engines.
They are stateful, event-aware, and own persistence and logging.
"""

from .base_manager import BaseManager
from .day_progression_manager import DayProgressionManager
from .goal_manager import GoalManager
from .program_manager import ProgramManager
from .progress_manager import ProgressManager
from .statistics_manager import StatisticsManager

__all__ = [
    "BaseManager",
    "DayProgressionManager",
    "GoalManager",
    "ProgramManager",
    "ProgressManager",
    "StatisticsManager",
]
