"""Engine modules for Rise Habits integration.

Contains specialized computation engines:
- program_engine: Catalog expansion and questionnaire goals
- progress_engine: Task completion, day counts and streaks
- day_progression_engine: Calendar-day boundary detection
- statistics_engine: Per-category statistics and snapshot projection
"""

# Use relative imports within package to avoid mypy module resolution issues
from .day_progression_engine import DayProgressionEngine
from .program_engine import ProgramEngine
from .progress_engine import ProgressEngine
from .statistics_engine import StatisticsEngine

__all__ = [
    "DayProgressionEngine",
    "ProgramEngine",
    "ProgressEngine",
    "StatisticsEngine",
]
