"""AI plan request and response models."""
from typing import Optional

from pydantic import BaseModel, Field

from health_hub.plans import NormalizedPlan, render_lines


class RecommendationsRequest(BaseModel):
    """Focus is one of general, nutrition or fitness."""

    focus: str = "general"
    preferences: str = ""


class MealPlanRequest(BaseModel):
    preferences: str = ""
    duration: int = Field(default=7, ge=1, le=14)


class WorkoutPlanRequest(BaseModel):
    preferences: str = ""
    duration: int = Field(default=7, ge=1, le=14)
    equipment: Optional[list[str]] = None


class PlanResponse(BaseModel):
    """
    Normalized plan. ``structured`` tells which variant it is: structured
    plans carry ``entries``, raw-text plans carry ``text``. ``lines`` is the
    ready-to-print rendering of either.
    """

    kind: str
    structured: bool
    entries: list[dict] = Field(default_factory=list)
    text: Optional[str] = None
    lines: list[str] = Field(default_factory=list)

    @classmethod
    def from_plan(cls, plan: NormalizedPlan) -> "PlanResponse":
        return cls(**plan.to_dict(), lines=list(render_lines(plan)))
