"""Authentication schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request body."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response."""

    success: bool
    message: str
    access_token: str
    token_type: str = Field(default="bearer")
    role: str = Field(default="")


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: int
    role: str


class ProfileResponse(BaseModel):
    """Current user profile."""

    id: int
    username: str
    display_name: str
    role: str
    can_manage_rules: bool
    created_at: datetime
    last_active_at: Optional[datetime]
