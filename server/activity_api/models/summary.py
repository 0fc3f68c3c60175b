"""Activity summary, insight and prediction models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Optional


class Goals(BaseModel):
    """Daily step and calorie goals."""

    model_config = ConfigDict(from_attributes=True)

    steps: int
    calories: float


class GoalsUpdateRequest(BaseModel):
    """Request model for replacing the goals; values are checked by the engine."""

    steps: Optional[Any] = None
    calories: Optional[Any] = None


class TodayProgress(BaseModel):
    """Today's totals against the goals."""

    model_config = ConfigDict(populate_by_name=True)

    steps: int
    calories: float
    step_goal: int = Field(serialization_alias="stepGoal")
    calorie_goal: float = Field(serialization_alias="calorieGoal")
    step_progress: float = Field(serialization_alias="stepProgress")
    calorie_progress: float = Field(serialization_alias="calorieProgress")


class Streak(BaseModel):
    """Consecutive goal-meeting days ending today."""

    days: int


class DayTotals(BaseModel):
    """Totals for one UTC day."""

    date: str
    steps: int
    calories: float


class Insights(BaseModel):
    """Rolling 7-day insights."""

    model_config = ConfigDict(populate_by_name=True)

    average_steps_7d: int = Field(serialization_alias="averageSteps7d")
    average_calories_7d: int = Field(serialization_alias="averageCalories7d")
    goal_compliance_rate: float = Field(ge=0, le=1, serialization_alias="goalComplianceRate")
    best_day: Optional[DayTotals] = Field(default=None, serialization_alias="bestDay")


class Predictions(BaseModel):
    """Next-day forecast."""

    model_config = ConfigDict(populate_by_name=True)

    steps: int
    calories: int
    basis_days: int = Field(serialization_alias="basisDays")


class ActivitySummary(BaseModel):
    """Complete activity summary."""

    goals: Goals
    today: TodayProgress
    streak: Streak
    insights: Insights
    predictions: Predictions
