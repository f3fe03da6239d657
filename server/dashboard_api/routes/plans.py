"""AI-generated plan routes.

These endpoints forward requests to the backend's AI service and return
the answer in normalized form, whether the model produced structured
data or free text.
"""
from fastapi import APIRouter, Depends, HTTPException

from health_hub import AIPlanner, HealthHubClient
from health_hub.ai import RECOMMENDATION_FOCUSES

from ..dependencies import get_client
from ..models.plans import (
    MealPlanRequest,
    PlanResponse,
    RecommendationsRequest,
    WorkoutPlanRequest,
)

router = APIRouter(prefix="/api/ai", tags=["AI Plans"])


@router.post("/recommendations", response_model=PlanResponse)
async def get_recommendations(
    request: RecommendationsRequest,
    client: HealthHubClient = Depends(get_client),
):
    """Health tips grouped by category."""
    if request.focus not in RECOMMENDATION_FOCUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid focus '{request.focus}'. Must be one of: {list(RECOMMENDATION_FOCUSES)}",
        )
    plan = await AIPlanner(client).recommendations(request.focus, request.preferences)
    return PlanResponse.from_plan(plan)


@router.post("/meal-plan", response_model=PlanResponse)
async def get_meal_plan(
    request: MealPlanRequest,
    client: HealthHubClient = Depends(get_client),
):
    """Day-by-day meal plan."""
    plan = await AIPlanner(client).meal_plan(request.preferences, request.duration)
    return PlanResponse.from_plan(plan)


@router.post("/workout-plan", response_model=PlanResponse)
async def get_workout_plan(
    request: WorkoutPlanRequest,
    client: HealthHubClient = Depends(get_client),
):
    """Day-by-day workout plan."""
    plan = await AIPlanner(client).workout_plan(
        request.preferences, request.duration, request.equipment
    )
    return PlanResponse.from_plan(plan)


@router.get("/status")
async def get_ai_status(client: HealthHubClient = Depends(get_client)):
    """Whether the backend has its AI service configured."""
    return {"configured": await AIPlanner(client).is_configured()}
