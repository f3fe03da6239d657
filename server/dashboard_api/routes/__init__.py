"""API route modules."""
from .auth import router as auth_router
from .bmi import router as bmi_router
from .dashboard import router as dashboard_router
from .plans import router as plans_router
from .tasks import router as tasks_router

__all__ = [
    "auth_router",
    "bmi_router",
    "dashboard_router",
    "plans_router",
    "tasks_router",
]
