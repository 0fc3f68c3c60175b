"""
Daily Aggregator.

Collapses the sample log into one totals record per UTC calendar day.

Samples from the same device on the same day are cumulative re-readings of
a counter, so only the reading with the latest ``end`` is counted for that
device. Totals from different devices on the same day are added together.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Tuple

from .clock import parse_timestamp
from .goals import GoalConfig
from .sample_store import Sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyTotals:
    """Steps and calories for one UTC day."""

    date: str  # YYYY-MM-DD
    steps: int = 0
    calories: float = 0.0

    def meets(self, goal: GoalConfig) -> bool:
        """True when both the step and calorie goals are reached."""
        return self.steps >= goal.steps and self.calories >= goal.calories

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"date": self.date, "steps": self.steps, "calories": self.calories}


def aggregate_daily(samples: Iterable[Sample]) -> Dict[str, DailyTotals]:
    """
    Aggregate samples into per-day totals.

    Args:
        samples: Stored samples in any order

    Returns:
        Mapping of ``YYYY-MM-DD`` to DailyTotals, in ascending date order.
        Samples whose ``end`` cannot be parsed are left out.
    """
    latest: Dict[Tuple[str, str], Tuple[datetime, Sample]] = {}

    for sample in samples:
        end = parse_timestamp(sample.end)
        if end is None:
            logger.debug(f"[AGGREGATE] Skipping sample {sample.id} with unparseable end {sample.end!r}")
            continue

        key = (sample.device.device_id, end.date().isoformat())
        current = latest.get(key)
        # Ties on end go to the later-processed sample
        if current is None or end >= current[0]:
            latest[key] = (end, sample)

    steps_by_day: Dict[str, int] = defaultdict(int)
    calories_by_day: Dict[str, float] = defaultdict(float)
    for (_device_id, day), (_end, sample) in latest.items():
        steps_by_day[day] += sample.steps
        calories_by_day[day] += sample.calories

    return {
        day: DailyTotals(date=day, steps=steps_by_day[day], calories=calories_by_day[day])
        for day in sorted(steps_by_day)
    }
