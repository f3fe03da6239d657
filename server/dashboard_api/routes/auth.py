"""Registration and login routes."""
from fastapi import APIRouter, Depends

from health_hub import AuthService, HealthHubClient, RegistrationForm

from ..dependencies import get_anonymous_client
from ..models.auth import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    client: HealthHubClient = Depends(get_anonymous_client),
):
    """
    Create an account on the backend.

    Password confirmation and minimum length are checked here; the
    confirmation itself is never forwarded.
    """
    form = RegistrationForm(**request.model_dump())
    user = await AuthService(client).register(form)
    return AuthResponse(token=client.session.token, user=user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    client: HealthHubClient = Depends(get_anonymous_client),
):
    """Exchange credentials for a bearer token."""
    user = await AuthService(client).login(request.email, request.password)
    return AuthResponse(token=client.session.token, user=user)
