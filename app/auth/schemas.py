"""
Pydantic schemas for authentication module.
DTOs for signup, login, and token responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    """
    Schema for user registration.

    Email and password are checked for presence by the service so that a
    missing field reports the same error as an empty one.
    """
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, max_length=128)
    name: Optional[str] = Field(None, max_length=255)


class LoginRequest(BaseModel):
    """Schema for user login."""
    email: Optional[EmailStr] = None
    password: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class UserSummary(BaseModel):
    """Public part of a user returned with a token."""
    email: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    """Schema for the current user profile."""
    id: str
    email: str
    name: Optional[str] = None
    created_at: datetime
    analysis_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthResponse(BaseModel):
    """Schema for signup and login responses."""
    message: str
    token: str
    user: UserSummary


class TokenPayload(BaseModel):
    """Schema for decoded JWT token payload."""
    sub: str  # user_id
    email: str
    exp: datetime
    type: str = "access"


class AuthError(BaseModel):
    """Schema for authentication errors."""
    error: str
    code: str
