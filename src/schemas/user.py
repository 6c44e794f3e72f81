"""Authentication schema definitions."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.profile import Profile


class Account(BaseModel):
    """Account as returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    created_at: Optional[datetime] = None


class SignupRequest(BaseModel):
    email: str = Field(description="Login email, unique per account.")
    password: str = Field(min_length=6, description="Plain text password.")
    username: Optional[str] = Field(
        default=None,
        description="Profile username. Defaults to the local part of the email.",
    )
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    admin_token: Optional[str] = Field(
        default=None,
        description="Grants the admin role when it matches ADMIN_TOKEN.",
    )


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    account: Account
    token: str
    token_type: str = "bearer"


class CurrentUserResponse(BaseModel):
    account: Account
    profile: Optional[Profile] = None
    roles: List[str] = Field(default_factory=list)
