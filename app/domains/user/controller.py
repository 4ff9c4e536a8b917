"""User authentication controller endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, token_issuer
from app.core.security import REFRESH_TOKEN_TYPE
from app.database import get_db
from app.domains.user.service import UserService
from app.exceptions.user import InvalidTokenError
from app.schemas.user import (
    AuthResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from models.user import User

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _auth_response(user: User, message: str) -> AuthResponse:
    tokens = token_issuer.create_token_pair(user.id, user.username)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=TokenResponse(**tokens.model_dump()),
        message=message,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: UserRegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user and issue a token pair."""
    user_service = UserService(db)
    user = await user_service.register_user(
        email=str(register_data.email),
        username=register_data.username,
        password=register_data.password,
    )
    return _auth_response(user, "User created successfully")


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate with email and password."""
    user_service = UserService(db)
    user = await user_service.authenticate(str(login_data.email), login_data.password)
    return _auth_response(user, "Login successful")


@router.post("/refresh", response_model=AuthResponse)
async def refresh(refresh_data: RefreshTokenRequest, db: AsyncSession = Depends(get_db)):
    """Exchange a refresh token for a new token pair."""
    payload = token_issuer.verify_token(refresh_data.refresh_token, expected_type=REFRESH_TOKEN_TYPE)

    user_service = UserService(db)
    try:
        user = await user_service.get_user_by_id(UUID(payload["sub"]))
    except ValueError as e:
        raise InvalidTokenError("Invalid refresh token") from e

    if not user or not user.is_active:
        raise InvalidTokenError("Invalid refresh token")

    return _auth_response(user, "Token refreshed successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user information."""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    update_data: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update the current user's username and/or email."""
    user_service = UserService(db)
    updated_user = await user_service.update_user(
        user_id=current_user.id,
        username=update_data.username,
        email=str(update_data.email) if update_data.email is not None else None,
    )
    return UserResponse.model_validate(updated_user)
