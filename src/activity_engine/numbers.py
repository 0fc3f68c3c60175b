"""Numeric coercion and rounding helpers."""

import math
from typing import Any


def coerce_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce loosely-typed numeric input to a finite float.

    Missing, non-numeric and non-finite values all fall back to ``fallback``;
    this never raises.
    """
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return fallback
    return parsed if math.isfinite(parsed) else fallback


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


# Largest step count a 64-bit signed INTEGER column can hold
MAX_STEPS = 2 ** 63 - 1


def coerce_steps(value: Any) -> int:
    """Whole step count; values outside the storable range count as malformed (0)."""
    steps = round_half_up(coerce_number(value))
    if abs(steps) > MAX_STEPS:
        return 0
    return steps
