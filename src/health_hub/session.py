"""
Identity session for the Health Hub client.

Holds the bearer token and the signed-in user's cached profile, and
provides the registration/login flows that populate them.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from .errors import InputValidationError, RemoteError
from .models import User

if TYPE_CHECKING:
    from .client import HealthHubClient

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass
class Session:
    """Token and profile for the current user."""

    token: Optional[str] = None
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def sign_in(self, token: str, user: Optional[User]) -> None:
        self.token = token
        self.user = user

    def invalidate(self) -> None:
        """Forget the token and the cached profile."""
        self.token = None
        self.user = None

    def update_user(self, user: User) -> None:
        self.user = user

    def set_current_bmi(self, bmi: float) -> None:
        """Refresh the cached BMI after a successful BMI update."""
        if self.user is not None:
            self.user = self.user.model_copy(update={"current_bmi": bmi})


class RegistrationForm(BaseModel):
    """Sign-up form as entered by the user."""

    name: str
    email: str
    password: str
    confirm_password: str
    age: Optional[str | int] = None
    gender: Optional[str] = None
    height: Optional[str | float] = None
    weight: Optional[str | float] = None
    activity_level: str = "moderately_active"
    goals: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)

    def validate_form(self) -> None:
        """Check the form locally before anything is sent."""
        if self.password != self.confirm_password:
            raise InputValidationError("Passwords do not match", field="confirm_password")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise InputValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                field="password",
            )

    def to_payload(self) -> dict:
        """Request body for POST /auth/register; the confirmation never leaves."""
        payload = {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "gender": self.gender,
            "activityLevel": self.activity_level,
            "goals": list(self.goals),
            "dietaryRestrictions": list(self.dietary_restrictions),
        }
        if self.age not in (None, ""):
            payload["age"] = _to_number(self.age, int, "age")
        if self.height not in (None, ""):
            payload["height"] = _to_number(self.height, float, "height")
        if self.weight not in (None, ""):
            payload["weight"] = _to_number(self.weight, float, "weight")
        return payload


def _to_number(value, kind, field: str):
    try:
        return kind(float(value)) if kind is int else kind(value)
    except (TypeError, ValueError):
        raise InputValidationError(f"{field.capitalize()} must be a number", field=field)


class AuthService:
    """Registration, login and profile flows over a HealthHubClient."""

    def __init__(self, client: "HealthHubClient"):
        self.client = client

    @property
    def session(self) -> Session:
        return self.client.session

    async def register(self, form: RegistrationForm) -> User:
        form.validate_form()
        body = await self.client.post("/auth/register", json=form.to_payload())
        return self._sign_in(body)

    async def login(self, email: str, password: str) -> User:
        if not email or not password:
            raise InputValidationError("Please enter both email and password")
        body = await self.client.post("/auth/login", json={"email": email, "password": password})
        return self._sign_in(body)

    async def verify(self) -> User:
        """Confirm the stored token is still accepted and reload the user."""
        body = await self.client.get("/auth/verify")
        user = User.model_validate(_unwrap_user(body))
        self.session.update_user(user)
        return user

    async def refresh_profile(self) -> User:
        body = await self.client.get("/users/profile")
        user = User.model_validate(_unwrap_user(body))
        self.session.update_user(user)
        return user

    async def update_profile(self, changes: dict) -> User:
        await self.client.put("/users/profile", json=changes)
        return await self.refresh_profile()

    def logout(self) -> None:
        logger.info("[SESSION] Signed out")
        self.session.invalidate()

    def _sign_in(self, body) -> User:
        body = body or {}
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise RemoteError("The server did not return a session token")
        user = User.model_validate(_unwrap_user(body))
        self.session.sign_in(token, user)
        logger.info(f"[SESSION] Signed in as {user.email or user.id}")
        return user


def _unwrap_user(body) -> dict:
    if isinstance(body, dict) and isinstance(body.get("user"), dict):
        return body["user"]
    return body if isinstance(body, dict) else {}
