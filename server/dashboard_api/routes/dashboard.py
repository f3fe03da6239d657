"""Dashboard overview routes."""
from fastapi import APIRouter, Depends, Query

from health_hub import DashboardAggregator, HealthHubClient

from ..config import Settings, get_settings
from ..dependencies import get_client
from ..models.dashboard import DashboardResponse

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse, response_model_by_alias=True)
async def get_dashboard(
    strict: bool = Query(
        default=False,
        description="Fail the whole request if any section fails to load",
    ),
    client: HealthHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    """
    Get the signed-in user's dashboard.

    Profile, task statistics and BMI history are fetched concurrently.
    Sections that fail are listed under ``errors``; the rest still render.
    """
    aggregator = DashboardAggregator(client, history_limit=settings.bmi_history_limit)
    view = await aggregator.refresh(strict=strict)
    return DashboardResponse.from_view(view)
