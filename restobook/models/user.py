"""User and authentication data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Role of an account."""

    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"


class User(BaseModel):
    """The authenticated account."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="User ID")
    username: str | None = Field(None, description="Login name")
    phone: str | None = Field(None, description="Phone number")
    full_name: str = Field("", description="Display name")
    email: str | None = Field(None, description="Email address")
    role: UserRole = Field(UserRole.USER, description="Account role")
    is_verified: bool = Field(False, description="Whether the account is verified")
    created_at: datetime | None = Field(None, description="When the account was created")


class AuthTokens(BaseModel):
    """JWT token pair issued by the server."""

    model_config = ConfigDict(frozen=True)

    access: str
    refresh: str


class AuthResponse(BaseModel):
    """Response of the login and register endpoints."""

    user: User
    tokens: AuthTokens
