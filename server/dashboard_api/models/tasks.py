"""Task list models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from health_hub.models import Task


class TaskCreateRequest(BaseModel):
    """New task as submitted by the frontend."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    category: str = "other"
    priority: str = "medium"
    due_date: Optional[str] = Field(default=None, alias="dueDate")


class TaskListResponse(BaseModel):
    """Tasks visible under the active filter."""

    filter: str
    tasks: list[Task]


class TaskDeleteResponse(BaseModel):
    """Outcome of a delete request."""

    deleted: bool
    tasks: list[Task]
