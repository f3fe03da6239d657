"""BMI routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from health_hub import BMIEngine, HealthHubClient, evaluate_bmi
from health_hub.models import BMIEntry

from ..config import Settings, get_settings
from ..dependencies import get_client
from ..models.bmi import BMIRequest, BMIResponse

router = APIRouter(prefix="/api/bmi", tags=["BMI"])


@router.get("/calculate", response_model=BMIResponse, response_model_by_alias=True)
async def calculate(
    height: Optional[float] = Query(default=None, description="Height in cm"),
    weight: Optional[float] = Query(default=None, description="Weight in kg"),
):
    """Compute BMI without touching the profile."""
    result = evaluate_bmi(height, weight)
    return BMIResponse(**result.to_dict())


@router.post("", response_model=BMIResponse, response_model_by_alias=True)
async def update_bmi(
    request: BMIRequest,
    client: HealthHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    """Compute BMI and store it on the signed-in user's profile."""
    engine = BMIEngine(client, history_limit=settings.bmi_history_limit)
    result = await engine.submit(request.height, request.weight)
    return BMIResponse(**result.to_dict(), persisted=True, current_bmi=result.bmi)


@router.get("/history", response_model=list[BMIEntry], response_model_by_alias=True)
async def get_history(
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Number of entries"),
    client: HealthHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    """Most recent BMI entries, newest first."""
    engine = BMIEngine(client, history_limit=settings.bmi_history_limit)
    return await engine.history(limit)
