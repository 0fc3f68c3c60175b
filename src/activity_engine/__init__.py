"""
Activity Engine.

Turns an append-only log of step samples into daily totals, goal streaks,
rolling insights and next-day forecasts.
"""

from .aggregator import DailyTotals, aggregate_daily
from .errors import ActivityEngineError, PersistenceError, ValidationError
from .forecast import Predictions, forecast_next_day, linear_fit
from .goals import DEFAULT_GOALS, GoalConfig, GoalStore, validate_goals
from .insights import Insights, calculate_insights
from .sample_store import DeviceInfo, IngestResult, Sample, SampleStore, normalize_sample
from .service import ActivityService
from .storage import InMemoryBackend, SnapshotBackend
from .streak import calculate_streak
from .summary import ActivitySummary, TodayProgress, compose_summary

__all__ = [
    "ActivityEngineError",
    "ActivityService",
    "ActivitySummary",
    "DEFAULT_GOALS",
    "DailyTotals",
    "DeviceInfo",
    "GoalConfig",
    "GoalStore",
    "InMemoryBackend",
    "IngestResult",
    "Insights",
    "PersistenceError",
    "Predictions",
    "Sample",
    "SampleStore",
    "SnapshotBackend",
    "TodayProgress",
    "ValidationError",
    "aggregate_daily",
    "calculate_insights",
    "calculate_streak",
    "compose_summary",
    "forecast_next_day",
    "linear_fit",
    "normalize_sample",
    "validate_goals",
]
