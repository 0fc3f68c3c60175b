"""Activity sample models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Literal

IngestStatus = Literal["created", "updated"]


class DeviceRecord(BaseModel):
    """Device that produced a sample."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    device_id: str = Field(serialization_alias="deviceId")
    model: str
    os_version: str = Field(serialization_alias="osVersion")


class SampleMeasurements(BaseModel):
    """Measurements of one observation window."""

    steps: int
    distance: float
    calories: float
    start: str
    end: str


class SampleRecord(BaseModel):
    """Stored activity sample."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    received_at: str = Field(serialization_alias="receivedAt")
    device: DeviceRecord
    sample: SampleMeasurements


class MetricTotals(BaseModel):
    """Plain sums over a list of samples."""

    steps: int
    distance: float
    calories: float


class MetricsResponse(BaseModel):
    """Filtered samples with their totals."""

    data: list[SampleRecord]
    totals: MetricTotals


class IngestResponse(BaseModel):
    """Result of storing a sample."""

    message: str
    status: IngestStatus
    id: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
