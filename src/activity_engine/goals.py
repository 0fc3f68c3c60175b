"""
Goal Configuration.

Holds the user's daily step and calorie targets. Both values are always
positive; a rejected update leaves the previous configuration in place.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .errors import PersistenceError, ValidationError
from .numbers import MAX_STEPS
from .storage import SnapshotBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalConfig:
    """Daily activity targets."""

    steps: int
    calories: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"steps": self.steps, "calories": self.calories}


DEFAULT_GOALS = GoalConfig(steps=10000, calories=500.0)


def _positive_number(value: Any, name: str) -> float:
    if value is None:
        raise ValidationError(f"{name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{name} must be a positive finite number")
    return number


def validate_goals(steps: Any, calories: Any) -> GoalConfig:
    """
    Validate a goal update.

    Raises:
        ValidationError: if either value is missing, non-numeric,
            non-positive or non-finite, or ``steps`` is not a whole number
            or is too large to store
    """
    step_value = _positive_number(steps, "steps")
    calorie_value = _positive_number(calories, "calories")
    if not step_value.is_integer():
        raise ValidationError("steps must be a whole number")
    if int(step_value) > MAX_STEPS:
        raise ValidationError(f"steps must not exceed {MAX_STEPS}")
    return GoalConfig(steps=int(step_value), calories=calorie_value)


class GoalStore:
    """Singleton goal configuration with snapshot persistence."""

    def __init__(self, backend: SnapshotBackend, defaults: GoalConfig = DEFAULT_GOALS):
        self._backend = backend
        self._defaults = defaults
        self._goal = defaults

    def load(self) -> GoalConfig:
        """Load the persisted goals, falling back to the defaults."""
        stored: Optional[GoalConfig] = self._backend.load_goals()
        if stored is None:
            self._goal = self._defaults
        else:
            try:
                self._goal = validate_goals(stored.steps, stored.calories)
            except ValidationError as e:
                logger.warning(f"[GOALS] Ignoring stored goals ({e}), using defaults")
                self._goal = self._defaults
        logger.info(f"[GOALS] Loaded goals: {self._goal.steps} steps, {self._goal.calories} kcal")
        return self._goal

    def get(self) -> GoalConfig:
        return self._goal

    def update(self, steps: Any, calories: Any) -> GoalConfig:
        """
        Replace the goal configuration and persist it.

        Raises:
            ValidationError: if the new values are rejected (nothing changes)
            PersistenceError: if the snapshot could not be written
        """
        goal = validate_goals(steps, calories)
        self._goal = goal
        try:
            self._backend.save_goals(goal)
        except PersistenceError as e:
            logger.error(f"[GOALS] Failed to persist goals: {e}")
            raise
        logger.info(f"[GOALS] Updated goals: {goal.steps} steps, {goal.calories} kcal")
        return goal
