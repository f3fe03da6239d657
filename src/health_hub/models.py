"""Pydantic models for data exchanged with the Health Hub backend."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TaskCategory(str, Enum):
    """Kinds of health task."""

    WORKOUT = "workout"
    MEAL = "meal"
    HYDRATION = "hydration"
    SLEEP = "sleep"
    MEDICATION = "medication"
    OTHER = "other"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Goal(str, Enum):
    """Health goals a user can pick at registration."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_GAIN = "muscle_gain"
    MAINTAIN_WEIGHT = "maintain_weight"
    IMPROVE_FITNESS = "improve_fitness"
    IMPROVE_HEALTH = "improve_health"


class DietaryRestriction(str, Enum):
    """Dietary restrictions a user can declare."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten_free"
    DAIRY_FREE = "dairy_free"
    NUT_FREE = "nut_free"
    HALAL = "halal"
    KOSHER = "kosher"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class User(BaseModel):
    """User profile as returned by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    email: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    activity_level: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("activityLevel", "activity_level"),
        serialization_alias="activityLevel",
    )
    current_bmi: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("currentBMI", "current_bmi"),
        serialization_alias="currentBMI",
    )
    goals: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("dietaryRestrictions", "dietary_restrictions"),
        serialization_alias="dietaryRestrictions",
    )


class Task(BaseModel):
    """A health task owned by the signed-in user."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    description: Optional[str] = None
    category: str = TaskCategory.OTHER.value
    priority: str = TaskPriority.MEDIUM.value
    completed: bool = False
    due_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("dueDate", "due_date"),
        serialization_alias="dueDate",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )


class TaskDraft(BaseModel):
    """Fields for a new task. Only the title is checked before sending."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    category: str = TaskCategory.OTHER.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: Optional[str] = Field(default=None, serialization_alias="dueDate")

    def to_payload(self) -> dict:
        """Request body for POST /tasks."""
        payload = self.model_dump(by_alias=True)
        if not payload.get("dueDate"):
            payload.pop("dueDate", None)
        return payload


class TaskStats(BaseModel):
    """Completion statistics computed by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    completed_tasks: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("completedTasks", "completed_tasks"),
        serialization_alias="completedTasks",
    )
    pending_tasks: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("pendingTasks", "pending_tasks"),
        serialization_alias="pendingTasks",
    )
    completion_rate: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("completionRate", "completion_rate"),
        serialization_alias="completionRate",
    )
    total_tasks: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("totalTasks", "total_tasks"),
        serialization_alias="totalTasks",
    )

    @property
    def total(self) -> Optional[int]:
        """
        Tasks in scope for these counts. Completed plus pending always
        equals the number of tasks listed under the all filter.
        """
        if self.total_tasks is not None:
            return self.total_tasks
        if self.completed_tasks is None or self.pending_tasks is None:
            return None
        return self.completed_tasks + self.pending_tasks


class BMIEntry(BaseModel):
    """One row of the BMI history log."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timestamp: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("date", "timestamp"),
        serialization_alias="date",
    )
    bmi: float
    weight: Optional[float] = None
    height: Optional[float] = None


def display_value(value, suffix: str = "") -> str:
    """Format a possibly missing statistic, using 'N/A' when absent."""
    if value is None or value == "":
        return "N/A"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{suffix}"
