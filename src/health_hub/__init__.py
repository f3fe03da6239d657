"""
Health Hub client core.

Session handling, task store, BMI engine, AI plan normalization and
dashboard aggregation over the Health Hub REST backend.
"""

from .ai import AIPlanner
from .bmi import BMICategory, BMIEngine, BMIResult, calculate_bmi, classify_bmi, evaluate_bmi
from .client import HealthHubClient
from .dashboard import DashboardAggregator, DashboardView
from .errors import (
    HealthHubError,
    InputValidationError,
    RemoteError,
    RemoteUnavailableError,
    SessionExpiredError,
)
from .plans import PlanKind, RawTextPlan, StructuredPlan, normalize_plan, render_lines
from .session import AuthService, RegistrationForm, Session
from .tasks import TaskFilter, TaskStore

__all__ = [
    "AIPlanner",
    "AuthService",
    "BMICategory",
    "BMIEngine",
    "BMIResult",
    "DashboardAggregator",
    "DashboardView",
    "HealthHubClient",
    "HealthHubError",
    "InputValidationError",
    "PlanKind",
    "RawTextPlan",
    "RegistrationForm",
    "RemoteError",
    "RemoteUnavailableError",
    "Session",
    "SessionExpiredError",
    "StructuredPlan",
    "TaskFilter",
    "TaskStore",
    "calculate_bmi",
    "classify_bmi",
    "evaluate_bmi",
    "normalize_plan",
    "render_lines",
]
