"""
Dashboard Aggregator.

Fetches the profile, task statistics and BMI history concurrently and
merges them into one read view.

By default the refresh is all-or-nothing: any failed section aborts it.
With ``strict=False`` each section resolves on its own; a failed section
is logged and reported in ``DashboardView.errors`` while the others
still render. An expired session always aborts.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .bmi import BMI_HISTORY_DISPLAY_LIMIT, parse_bmi_history
from .errors import SessionExpiredError
from .models import BMIEntry, TaskStats, User, display_value

logger = logging.getLogger(__name__)

SECTION_PROFILE = "profile"
SECTION_STATS = "stats"
SECTION_BMI_HISTORY = "bmi_history"


@dataclass
class DashboardView:
    """Merged dashboard data, possibly with some sections missing."""

    profile: Optional[User] = None
    stats: Optional[TaskStats] = None
    bmi_history: List[BMIEntry] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_complete(self) -> bool:
        return not self.errors

    @property
    def current_bmi_display(self) -> str:
        return display_value(self.profile.current_bmi if self.profile else None)

    def stat_display(self, name: str) -> str:
        """Display value for a stats field ('N/A' when missing)."""
        value = getattr(self.stats, name, None) if self.stats else None
        suffix = "%" if name == "completion_rate" else ""
        return display_value(value, suffix)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "profile": self.profile.model_dump(by_alias=True) if self.profile else None,
            "stats": self.stats.model_dump(by_alias=True) if self.stats else None,
            "bmi_history": [e.model_dump(by_alias=True) for e in self.bmi_history],
            "errors": dict(self.errors),
            "refreshed_at": self.refreshed_at.isoformat(),
        }


class DashboardAggregator:
    """Builds DashboardView snapshots for the signed-in user."""

    def __init__(self, client, history_limit: int = BMI_HISTORY_DISPLAY_LIMIT):
        self.client = client
        self.history_limit = history_limit
        self.view: Optional[DashboardView] = None

    async def _fetch_profile(self) -> User:
        body = await self.client.get("/users/profile")
        if isinstance(body, dict) and isinstance(body.get("user"), dict):
            body = body["user"]
        return User.model_validate(body)

    async def _fetch_stats(self) -> TaskStats:
        body = await self.client.get("/tasks/stats/summary")
        return TaskStats.model_validate(body if isinstance(body, dict) else {})

    async def _fetch_bmi_history(self) -> List[BMIEntry]:
        body = await self.client.get("/users/bmi-history", params={"limit": self.history_limit})
        return parse_bmi_history(body, self.history_limit)

    async def refresh(self, strict: bool = True) -> DashboardView:
        """
        Fetch all three sections concurrently and merge them.

        Args:
            strict: re-raise the first failure; False renders the sections
                that succeeded and lists the rest in ``errors``

        Raises:
            SessionExpiredError: the backend rejected the session
        """
        sections = (SECTION_PROFILE, SECTION_STATS, SECTION_BMI_HISTORY)
        fetches = (self._fetch_profile(), self._fetch_stats(), self._fetch_bmi_history())

        results = await asyncio.gather(*fetches, return_exceptions=True)
        for result in results:
            if isinstance(result, SessionExpiredError):
                raise result

        view = DashboardView()
        for section, result in zip(sections, results):
            if isinstance(result, BaseException):
                logger.error(f"[DASHBOARD] Failed to load {section}: {result}")
                if strict:
                    raise result
                view.errors[section] = str(result) or type(result).__name__
            elif section == SECTION_PROFILE:
                view.profile = result
            elif section == SECTION_STATS:
                view.stats = result
            else:
                view.bmi_history = result

        if view.profile is not None:
            self.client.session.update_user(view.profile)

        self.view = view
        return view
