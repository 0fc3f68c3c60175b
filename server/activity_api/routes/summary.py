"""Activity summary, insight and prediction API routes."""
from fastapi import APIRouter, Depends

from activity_engine import ActivityService
from activity_engine import ActivitySummary as SummaryResult
from activity_engine import Insights as InsightsResult
from activity_engine import Predictions as PredictionsResult

from ..database import get_activity_service
from ..models.summary import ActivitySummary, Insights, Predictions

router = APIRouter(prefix="/api", tags=["Activity Summary"])


def summary_to_model(summary: SummaryResult) -> ActivitySummary:
    """Convert the engine summary to its response model."""
    return ActivitySummary.model_validate(summary.to_dict())


def _to_insights(insights: InsightsResult) -> Insights:
    return Insights.model_validate(insights.to_dict())


def _to_predictions(predictions: PredictionsResult) -> Predictions:
    return Predictions.model_validate(predictions.to_dict())


@router.get("/summary", response_model=ActivitySummary, response_model_by_alias=True)
async def get_activity_summary(service: ActivityService = Depends(get_activity_service)):
    """
    Get goals, today's progress, streak, 7-day insights and tomorrow's forecast.
    Recomputed from the full sample history on every call.
    """
    return summary_to_model(service.get_summary())


@router.get("/insights", response_model=Insights, response_model_by_alias=True)
async def get_insights(service: ActivityService = Depends(get_activity_service)):
    """Get the rolling 7-day insights."""
    return _to_insights(service.get_insights())


@router.get("/predictions", response_model=Predictions, response_model_by_alias=True)
async def get_predictions(service: ActivityService = Depends(get_activity_service)):
    """Get the next-day forecast."""
    return _to_predictions(service.get_predictions())
