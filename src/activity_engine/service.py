"""
Activity Service.

The owned handle over the sample store and goal configuration. Its mutation
methods are the only write path; a single lock serializes every
read-modify-write and every snapshot read. Derived payloads are computed
outside the lock from the snapshot.
"""

import logging
import threading
from datetime import date
from typing import Any, List, Tuple

from .aggregator import aggregate_daily
from .clock import Clock, utc_now, utc_today
from .forecast import Predictions, forecast_next_day
from .goals import DEFAULT_GOALS, GoalConfig, GoalStore
from .insights import Insights, calculate_insights
from .sample_store import IngestResult, Sample, SampleStore
from .storage import SnapshotBackend
from .summary import ActivitySummary, compose_summary

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Entry point used by the I/O layer.

    Args:
        backend: Snapshot storage for samples and goals
        default_goals: Goals used until an update is persisted
        clock: Returns the current time; "today" is its UTC calendar day
    """

    def __init__(
        self,
        backend: SnapshotBackend,
        default_goals: GoalConfig = DEFAULT_GOALS,
        clock: Clock = utc_now,
    ):
        self._clock = clock
        self._lock = threading.Lock()
        self._samples = SampleStore(backend, clock=clock)
        self._goals = GoalStore(backend, defaults=default_goals)

    def load(self) -> None:
        """Load persisted state (call once at startup)."""
        with self._lock:
            self._samples.load()
            self._goals.load()

    def today(self) -> date:
        return utc_today(self._clock)

    # ----------------- mutations -----------------

    def ingest(self, payload: Any) -> IngestResult:
        with self._lock:
            return self._samples.ingest(payload)

    def reset(self) -> None:
        with self._lock:
            self._samples.reset()

    def set_goals(self, steps: Any, calories: Any) -> ActivitySummary:
        """Update the goals and return the recomputed summary."""
        with self._lock:
            self._goals.update(steps, calories)
        return self.get_summary()

    # ----------------- reads -----------------

    def query(self, since: Any = None, limit: Any = None) -> List[Sample]:
        with self._lock:
            return self._samples.query(since=since, limit=limit)

    def sample_count(self) -> int:
        with self._lock:
            return len(self._samples)

    def get_goals(self) -> GoalConfig:
        with self._lock:
            return self._goals.get()

    def get_summary(self) -> ActivitySummary:
        samples, goal = self._snapshot()
        return compose_summary(samples, goal, self.today())

    def get_insights(self) -> Insights:
        samples, goal = self._snapshot()
        return calculate_insights(aggregate_daily(samples), goal, self.today())

    def get_predictions(self) -> Predictions:
        samples, _goal = self._snapshot()
        return forecast_next_day(aggregate_daily(samples), self.today())

    def _snapshot(self) -> Tuple[List[Sample], GoalConfig]:
        with self._lock:
            return self._samples.snapshot(), self._goals.get()
