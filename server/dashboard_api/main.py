"""Health Hub Dashboard API - FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from health_hub import (
    InputValidationError,
    RemoteError,
    RemoteUnavailableError,
    SessionExpiredError,
)

from .config import get_settings
from .routes import auth, bmi, dashboard, plans, tasks

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Health Hub Dashboard API",
    description="Tasks, BMI tracking and normalized AI plans over the Health Hub backend",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(tasks.router)
app.include_router(bmi.router)
app.include_router(plans.router)


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(SessionExpiredError)
async def session_expired_handler(request: Request, exc: SessionExpiredError):
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message, "sessionExpired": True},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(RemoteError)
async def remote_error_handler(request: Request, exc: RemoteError):
    if isinstance(exc, RemoteUnavailableError):
        status_code = 504 if exc.timed_out else 503
    elif exc.status_code == 401:
        status_code = 401
    else:
        status_code = 502
    logger.error(f"[API] {request.method} {request.url.path} failed upstream: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "upstreamStatus": exc.status_code},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "health-hub-dashboard-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
