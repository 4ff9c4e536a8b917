"""User-related Pydantic schemas for request/response validation."""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import BaseModelSchema, BaseSchema


class UserRegisterRequest(BaseSchema):
    """Schema for user registration request."""

    email: EmailStr = Field(..., description="User's email address")
    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    password: str = Field(..., min_length=8, max_length=128, description="Plain password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate that username is not blank."""
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()


class UserLoginRequest(BaseSchema):
    """Schema for user login request."""

    email: EmailStr
    password: str


class RefreshTokenRequest(BaseSchema):
    """Schema for token refresh request."""

    refresh_token: str


class UserResponse(BaseModelSchema):
    """Schema for user response data."""

    email: str
    username: str
    is_active: bool


class TokenResponse(BaseSchema):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserResponse
    token: TokenResponse
    message: str = "Authentication successful"


class UserUpdateRequest(BaseSchema):
    """Schema for updating user profile information."""

    username: Optional[str] = Field(None, min_length=3, max_length=100, description="Username to update")
    email: Optional[EmailStr] = Field(None, description="Email to update")
