"""
Insight Calculator.

Rolling 7-day averages and goal compliance over the days that have data,
plus the best day across the history up to today. Days after today are
ignored everywhere, matching the forecast.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping, Optional

from .aggregator import DailyTotals
from .goals import GoalConfig
from .numbers import round_half_up

INSIGHT_WINDOW_DAYS = 7


@dataclass(frozen=True)
class Insights:
    """Rolling insights over the trailing window."""

    average_steps_7d: int = 0
    average_calories_7d: int = 0
    goal_compliance_rate: float = 0.0  # fraction in [0, 1]
    best_day: Optional[DailyTotals] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "average_steps_7d": self.average_steps_7d,
            "average_calories_7d": self.average_calories_7d,
            "goal_compliance_rate": self.goal_compliance_rate,
            "best_day": self.best_day.to_dict() if self.best_day else None,
        }


def calculate_insights(
    daily: Mapping[str, DailyTotals],
    goal: GoalConfig,
    today: date,
    window_days: int = INSIGHT_WINDOW_DAYS,
) -> Insights:
    """
    Compute insights for the window ``[today - (window_days - 1), today]``.

    Days without an aggregate are excluded from the window rather than
    counted as zero, both for the averages and for the compliance rate.
    Days after ``today`` are ignored, for the window and for ``best_day``.

    Args:
        daily: Daily aggregates keyed by ``YYYY-MM-DD``
        goal: Current goal configuration
        today: Current UTC day
        window_days: Window length in days

    Returns:
        Insights; averages and compliance are 0 for an empty window and
        ``best_day`` is None when there is no history up to ``today``.
    """
    window_start = (today - timedelta(days=window_days - 1)).isoformat()
    window_end = today.isoformat()
    history = sorted(
        (totals for totals in daily.values() if totals.date <= window_end),
        key=lambda totals: totals.date,
    )
    window = [totals for totals in history if totals.date >= window_start]

    # max() keeps the first maximum, so the earliest date wins ties
    best_day = max(history, key=lambda totals: totals.steps) if history else None

    if not window:
        return Insights(best_day=best_day)

    count = len(window)
    compliant = sum(1 for totals in window if totals.meets(goal))
    return Insights(
        average_steps_7d=round_half_up(sum(t.steps for t in window) / count),
        average_calories_7d=round_half_up(sum(t.calories for t in window) / count),
        goal_compliance_rate=compliant / count,
        best_day=best_day,
    )
