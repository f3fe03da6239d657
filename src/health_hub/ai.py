"""Requests for AI-generated recommendations, meal plans and workout plans."""

import logging
from typing import Optional, Sequence

from .errors import RemoteError
from .plans import NormalizedPlan, PlanKind, normalize_plan

logger = logging.getLogger(__name__)

DEFAULT_PLAN_DAYS = 7
DEFAULT_EQUIPMENT = ("bodyweight", "dumbbells")
RECOMMENDATION_FOCUSES = ("general", "nutrition", "fitness")
NOT_CONFIGURED_MARKER = "AI service not configured"


class AIPlanner:
    """Calls the backend's AI endpoints and normalizes what comes back."""

    def __init__(self, client):
        self.client = client

    async def _generate(self, kind: PlanKind, path: str, body: dict) -> NormalizedPlan:
        try:
            response = await self.client.post(path, json=body)
        except RemoteError as e:
            logger.error(f"[PLANS] Error generating {kind.value}: {e.message}")
            raise
        data = response.get("data") if isinstance(response, dict) else None
        plan = normalize_plan(kind, data)
        logger.info(
            f"[PLANS] Generated {kind.value} "
            f"({'structured' if plan.is_structured else 'raw text'})"
        )
        return plan

    async def recommendations(self, focus: str = "general", preferences: str = "") -> NormalizedPlan:
        return await self._generate(
            PlanKind.RECOMMENDATIONS,
            "/ai/recommendations",
            {"focus": focus, "preferences": preferences},
        )

    async def meal_plan(self, preferences: str = "", duration: int = DEFAULT_PLAN_DAYS) -> NormalizedPlan:
        return await self._generate(
            PlanKind.MEAL_PLAN,
            "/ai/meal-plan",
            {"preferences": preferences, "duration": duration},
        )

    async def workout_plan(
        self,
        preferences: str = "",
        duration: int = DEFAULT_PLAN_DAYS,
        equipment: Optional[Sequence[str]] = None,
    ) -> NormalizedPlan:
        return await self._generate(
            PlanKind.WORKOUT_PLAN,
            "/ai/workout-plan",
            {
                "preferences": preferences,
                "duration": duration,
                "equipment": list(equipment if equipment is not None else DEFAULT_EQUIPMENT),
            },
        )

    async def is_configured(self) -> bool:
        """
        Probe the recommendations endpoint to see whether the backend has an
        AI key. Only an explicit "not configured" answer counts as False.
        """
        try:
            await self.client.post("/ai/recommendations", json={"focus": "general", "preferences": ""})
        except RemoteError as e:
            return NOT_CONFIGURED_MARKER not in (e.message or "")
        return True
