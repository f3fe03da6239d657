"""Authentication models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from health_hub.models import User


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    """Sign-up form, including the password confirmation."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")
    age: Optional[str | int] = None
    gender: Optional[str] = None
    height: Optional[str | float] = None
    weight: Optional[str | float] = None
    activity_level: str = Field(default="moderately_active", alias="activityLevel")
    goals: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list, alias="dietaryRestrictions")


class AuthResponse(BaseModel):
    token: str
    user: User
