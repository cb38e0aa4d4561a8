"""Test helpers for Rise Habits tests.

    from tests.helpers import FakeClock, make_utc_dt, fresh_schedule, complete_days

- clock.py: Settable clock injected into managers
- schedules.py: Generated schedules with completions applied
- signals.py: Collect dispatcher payloads emitted by managers
"""

from tests.helpers.clock import FakeClock, make_utc_dt
from tests.helpers.schedules import PROGRAM_START, complete_days, fresh_schedule
from tests.helpers.signals import capture_signal

__all__ = [
    "PROGRAM_START",
    "FakeClock",
    "capture_signal",
    "complete_days",
    "fresh_schedule",
    "make_utc_dt",
]
