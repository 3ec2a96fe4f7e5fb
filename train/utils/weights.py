"""Weight rounding and plan continuation multipliers."""

import math

PLATE_INCREMENT = 2.5

# Back-off multipliers for continuing after a plan ends
SHORT_PLAN_BACKOFF_MULTIPLIER = 0.93  # plans <= 4 weeks, ~2 reps in reserve
LONG_PLAN_BACKOFF_MULTIPLIER = 0.90  # longer plans, ~3 reps in reserve
DELOAD_MULTIPLIER = 0.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_to_plate(weight: float, increment: float = PLATE_INCREMENT) -> float:
    """Round a weight to the nearest loadable increment (2.5 lb by default)."""
    if increment <= 0:
        raise ValueError(f"increment must be positive, got {increment}")
    return round_half_up(weight / increment) * increment


def back_off_multiplier(plan_weeks: int) -> float:
    """Load multiplier for the first week after finishing a plan."""
    return SHORT_PLAN_BACKOFF_MULTIPLIER if plan_weeks <= 4 else LONG_PLAN_BACKOFF_MULTIPLIER


def back_off_weight(weight: float, plan_weeks: int) -> float:
    return round_to_plate(weight * back_off_multiplier(plan_weeks))


def deload_weight(weight: float) -> float:
    return round_to_plate(weight * DELOAD_MULTIPLIER)
