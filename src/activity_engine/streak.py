"""Goal-completion streak."""

from datetime import date, timedelta
from typing import Mapping

from .aggregator import DailyTotals
from .goals import GoalConfig


def calculate_streak(daily: Mapping[str, DailyTotals], goal: GoalConfig, today: date) -> int:
    """
    Count consecutive qualifying days walking backward from ``today``.

    A day qualifies when its aggregate exists and meets both goals. The walk
    stops at the first day that does not, so a day with no samples (today
    included) ends the streak.
    """
    days = 0
    cursor = today
    while True:
        totals = daily.get(cursor.isoformat())
        if totals is None or not totals.meets(goal):
            break
        days += 1
        if cursor == date.min:
            break
        cursor -= timedelta(days=1)
    return days
