# File: utils/math_utils.py
"""Math and calculation utilities for Rise Habits.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Functions:
    - round_value: Consistent rounding to configured precision
    - calculate_percentage: Completion-rate calculations
"""

from __future__ import annotations

# Default float precision for rate rounding
DATA_FLOAT_PRECISION = 2


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a value to the configured precision.

    Examples:
        round_value(33.3333) → 33.33
        round_value(10.0) → 10.0
    """
    return round(value, precision)


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate a percentage, clamped to 0..100.

    A non-positive target yields 0.0 instead of dividing by zero.

    Examples:
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0
        calculate_percentage(0, 14) → 0.0
    """
    if target <= 0:
        return 0.0

    percentage = (current / target) * 100
    return round_value(min(max(percentage, 0.0), 100.0), precision)
