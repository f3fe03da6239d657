"""Dashboard aggregate models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from health_hub.dashboard import DashboardView
from health_hub.models import BMIEntry, TaskStats, User


class StatCards(BaseModel):
    """Pre-formatted overview figures; missing values read 'N/A'."""

    model_config = ConfigDict(populate_by_name=True)

    current_bmi: str = Field(alias="currentBMI")
    completed_tasks: str = Field(alias="completedTasks")
    pending_tasks: str = Field(alias="pendingTasks")
    completion_rate: str = Field(alias="completionRate")


class DashboardResponse(BaseModel):
    """Profile, task stats and recent BMI history in one view."""

    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[User] = None
    stats: Optional[TaskStats] = None
    bmi_history: list[BMIEntry] = Field(default_factory=list, alias="bmiHistory")
    cards: StatCards
    errors: dict[str, str] = Field(default_factory=dict)
    refreshed_at: datetime = Field(alias="refreshedAt")

    @classmethod
    def from_view(cls, view: DashboardView) -> "DashboardResponse":
        return cls(
            profile=view.profile,
            stats=view.stats,
            bmi_history=view.bmi_history,
            cards=StatCards(
                current_bmi=view.current_bmi_display,
                completed_tasks=view.stat_display("completed_tasks"),
                pending_tasks=view.stat_display("pending_tasks"),
                completion_rate=view.stat_display("completion_rate"),
            ),
            errors=view.errors,
            refreshed_at=view.refreshed_at,
        )
