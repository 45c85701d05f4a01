"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserSignup(BaseModel):
    """Request model for sign-up."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    display_name: str | None = Field(None, max_length=100, description="Optional display name")
    role: Literal["papa", "mama"] = Field("papa", description="Household role of this user")


class LoginRequest(BaseModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class TokenPair(BaseModel):
    """Response model for authentication tokens."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(BaseModel):
    """Request model for token refresh."""

    refresh_token: str = Field(..., description="JWT refresh token")


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    display_name: str | None
    role: str
    default_tag: str


class UserResponse(BaseModel):
    """Response model for user data (without sensitive fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    is_active: bool
    created_at: datetime


class CurrentUser(BaseModel):
    """Response model for the authenticated user."""

    id: UUID
    email: str
    profile: ProfileResponse | None = None
    household_id: UUID
