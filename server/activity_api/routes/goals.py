"""Goal configuration API routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from activity_engine import ActivityService, PersistenceError, ValidationError

from ..database import get_activity_service
from ..models.summary import ActivitySummary, Goals, GoalsUpdateRequest
from .summary import summary_to_model

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Goals"])


@router.get("/goals", response_model=Goals)
async def get_goals(service: ActivityService = Depends(get_activity_service)):
    """Get the current daily goals."""
    return Goals.model_validate(service.get_goals())


@router.put("/goals", response_model=ActivitySummary, response_model_by_alias=True)
async def update_goals(
    request: GoalsUpdateRequest,
    service: ActivityService = Depends(get_activity_service),
):
    """
    Replace the daily goals and return the recomputed summary.

    Both values must be positive; a rejected update keeps the previous goals.
    """
    try:
        summary = service.set_goals(request.steps, request.calories)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        log.error(f"[API] Goal update failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to persist goals")
    return summary_to_model(summary)
