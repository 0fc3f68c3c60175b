"""Activity sample API routes."""
from typing import Any, Optional
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response

from activity_engine import ActivityService, PersistenceError, Sample, ValidationError
from activity_engine.sample_store import sum_totals

from ..database import get_activity_service
from ..models.metrics import (
    IngestResponse,
    MessageResponse,
    MetricTotals,
    MetricsResponse,
    SampleRecord,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Metrics"])


def _sample_to_record(sample: Sample) -> SampleRecord:
    """Convert a stored Sample to its wire model."""
    return SampleRecord.model_validate(sample.to_dict())


@router.get("/metrics", response_model=MetricsResponse, response_model_by_alias=True)
async def list_metrics(
    since: Optional[str] = Query(default=None, description="Drop samples ending before this ISO timestamp"),
    limit: Optional[str] = Query(default=None, description="Keep only the most recent N samples"),
    service: ActivityService = Depends(get_activity_service),
):
    """List stored samples (oldest first) with their plain totals."""
    samples = service.query(since=since, limit=limit)
    return MetricsResponse(
        data=[_sample_to_record(sample) for sample in samples],
        totals=MetricTotals(**sum_totals(samples)),
    )


@router.post("/metrics", response_model=IngestResponse, status_code=201)
async def ingest_metric(
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Store a sample sent by the mobile collector.

    Re-sending the same ``(deviceId, start, end)`` window replaces the stored
    measurements and answers 200 instead of 201.
    """
    try:
        result = service.ingest(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        log.error(f"[API] Sample ingestion failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to persist sample")

    if result.created:
        return IngestResponse(message="stored", status=result.status, id=result.id)

    response.status_code = 200
    return IngestResponse(message="updated", status=result.status, id=result.id)


@router.delete("/metrics", response_model=MessageResponse)
async def clear_metrics(service: ActivityService = Depends(get_activity_service)):
    """Delete every stored sample."""
    try:
        service.reset()
    except PersistenceError as e:
        log.error(f"[API] Reset failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to persist reset")
    return MessageResponse(message="cleared")
