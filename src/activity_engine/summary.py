"""
Summary Composer.

Assembles goals, today's progress, the streak, insights and predictions
into the single payload every read surface returns. Always recomputed
from the sample snapshot; nothing is cached.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .aggregator import DailyTotals, aggregate_daily
from .forecast import Predictions, forecast_next_day
from .goals import GoalConfig
from .insights import Insights, calculate_insights
from .sample_store import Sample
from .streak import calculate_streak


@dataclass(frozen=True)
class TodayProgress:
    """Today's totals against the goals."""

    steps: int
    calories: float
    step_goal: int
    calorie_goal: float
    step_progress: float
    calorie_progress: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "steps": self.steps,
            "calories": self.calories,
            "step_goal": self.step_goal,
            "calorie_goal": self.calorie_goal,
            "step_progress": self.step_progress,
            "calorie_progress": self.calorie_progress,
        }


@dataclass(frozen=True)
class ActivitySummary:
    """Complete activity summary."""

    goals: GoalConfig
    today: TodayProgress
    streak_days: int
    insights: Insights
    predictions: Predictions

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "goals": self.goals.to_dict(),
            "today": self.today.to_dict(),
            "streak": {"days": self.streak_days},
            "insights": self.insights.to_dict(),
            "predictions": self.predictions.to_dict(),
        }


def _progress(value: float, target: float) -> float:
    return value / target if target else 0.0


def compose_summary(samples: Iterable[Sample], goal: GoalConfig, today: date) -> ActivitySummary:
    """
    Build the activity summary for ``today`` (a UTC day).

    Args:
        samples: Snapshot of the sample store
        goal: Current goal configuration
        today: Current UTC day

    Returns:
        ActivitySummary
    """
    daily = aggregate_daily(samples)
    current = daily.get(today.isoformat()) or DailyTotals(date=today.isoformat())

    return ActivitySummary(
        goals=goal,
        today=TodayProgress(
            steps=current.steps,
            calories=current.calories,
            step_goal=goal.steps,
            calorie_goal=goal.calories,
            step_progress=_progress(current.steps, goal.steps),
            calorie_progress=_progress(current.calories, goal.calories),
        ),
        streak_days=calculate_streak(daily, goal, today),
        insights=calculate_insights(daily, goal, today),
        predictions=forecast_next_day(daily, today),
    )
