"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """The dashboard's (single-role) user."""

    id: UUID
    name: str
    email: EmailStr
    is_active: bool = True

    model_config = {"from_attributes": True}


class StoredUser(User):
    """User row including the password hash. Never leaves the auth package."""

    password_hash: str = Field(..., repr=False)


class Session(BaseModel):
    """An active user session."""

    token: str = Field(..., description="Session token (opaque string)")
    user_id: UUID
    created_at: datetime
    expires_at: datetime
    last_activity_at: datetime


class LoginCredentials(BaseModel):
    """Submitted login form."""

    email: EmailStr
    password: str = Field(..., min_length=6)
