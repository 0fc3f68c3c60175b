"""
Forecast Engine.

Projects tomorrow's steps and calories with an ordinary least-squares line
fitted over the most recent daily totals. The x-axis is the index of each
day inside the window, so gaps between days do not shift the fit.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence, Tuple

from .aggregator import DailyTotals
from .numbers import round_half_up

logger = logging.getLogger(__name__)

FORECAST_WINDOW_DAYS = 14


@dataclass(frozen=True)
class Predictions:
    """One-step-ahead forecast per metric."""

    steps: int = 0
    calories: int = 0
    basis_days: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"steps": self.steps, "calories": self.calories, "basis_days": self.basis_days}


def linear_fit(values: Sequence[float]) -> Tuple[float, float]:
    """
    Fit ``y = intercept + slope * x`` over ``x = 0..n-1``.

    Returns:
        (intercept, slope). An empty series gives (0, 0); a single point or
        a zero denominator gives a flat line through the mean.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0

    sum_x = sum_y = sum_xx = sum_xy = 0.0
    for x, y in enumerate(values):
        sum_x += x
        sum_y += y
        sum_xx += x * x
        sum_xy += x * y

    denominator = n * sum_xx - sum_x ** 2
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return intercept, slope


def project_next(values: Sequence[float]) -> int:
    """Evaluate the fitted line one step past the series, floored at zero."""
    intercept, slope = linear_fit(values)
    return round_half_up(max(0.0, intercept + slope * len(values)))


def forecast_next_day(
    daily: Mapping[str, DailyTotals],
    today: Optional[date] = None,
    window_days: int = FORECAST_WINDOW_DAYS,
) -> Predictions:
    """
    Forecast the day following the latest day in the window.

    Args:
        daily: Daily aggregates keyed by ``YYYY-MM-DD``
        today: When given, days after it are ignored (as for insights)
        window_days: Maximum number of most recent days to fit

    Returns:
        Predictions with ``basis_days`` set to the number of days fitted
    """
    history = sorted(daily.values(), key=lambda totals: totals.date)
    if today is not None:
        cutoff = today.isoformat()
        history = [totals for totals in history if totals.date <= cutoff]

    window = history[-window_days:] if window_days > 0 else []
    predictions = Predictions(
        steps=project_next([float(t.steps) for t in window]),
        calories=project_next([float(t.calories) for t in window]),
        basis_days=len(window),
    )
    logger.debug(
        f"[FORECAST] {predictions.steps} steps, {predictions.calories} kcal "
        f"from {predictions.basis_days} days"
    )
    return predictions
