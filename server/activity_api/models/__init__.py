"""Pydantic models for activity API requests and responses."""
from .metrics import (
    DeviceRecord,
    SampleMeasurements,
    SampleRecord,
    MetricTotals,
    MetricsResponse,
    IngestResponse,
    MessageResponse,
)
from .summary import (
    Goals,
    GoalsUpdateRequest,
    TodayProgress,
    Streak,
    DayTotals,
    Insights,
    Predictions,
    ActivitySummary,
)

__all__ = [
    "DeviceRecord",
    "SampleMeasurements",
    "SampleRecord",
    "MetricTotals",
    "MetricsResponse",
    "IngestResponse",
    "MessageResponse",
    "Goals",
    "GoalsUpdateRequest",
    "TodayProgress",
    "Streak",
    "DayTotals",
    "Insights",
    "Predictions",
    "ActivitySummary",
]
