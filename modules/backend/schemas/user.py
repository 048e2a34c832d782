"""
User Schemas.

Pydantic schemas for registration, login and user administration.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from modules.backend.schemas.base import CamelModel


class UserRegister(CamelModel):
    """Schema for creating an account."""

    username: str = Field(..., min_length=1, max_length=50, examples=["ada"])
    email: EmailStr = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(CamelModel):
    """Schema for exchanging credentials for a token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RoleUpdate(CamelModel):
    """Schema for changing a user's role."""

    role: str = Field(..., description="Either 'user' or 'admin'", examples=["admin"])


class UserResponse(CamelModel):
    """Public view of a user. Never includes credentials."""

    id: str
    username: str
    email: str
    role: str


class UserDetailResponse(UserResponse):
    """User with account timestamps, for admin listings."""

    created_at: datetime


class TokenResponse(CamelModel):
    """Bearer token plus the user it was issued for."""

    token: str
    token_type: str = "bearer"
    user: UserResponse


class RegisterResponse(TokenResponse):
    """Acknowledgement for a new account."""

    message: str


class UserMutationResponse(CamelModel):
    """Acknowledgement carrying the updated user."""

    message: str
    user: UserResponse
