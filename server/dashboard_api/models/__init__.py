"""Pydantic models for dashboard API requests and responses."""
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .bmi import BMIRequest, BMIResponse
from .dashboard import DashboardResponse, StatCards
from .plans import MealPlanRequest, PlanResponse, RecommendationsRequest, WorkoutPlanRequest
from .tasks import TaskCreateRequest, TaskDeleteResponse, TaskListResponse

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "BMIRequest",
    "BMIResponse",
    "DashboardResponse",
    "StatCards",
    "MealPlanRequest",
    "PlanResponse",
    "RecommendationsRequest",
    "WorkoutPlanRequest",
    "TaskCreateRequest",
    "TaskDeleteResponse",
    "TaskListResponse",
]
