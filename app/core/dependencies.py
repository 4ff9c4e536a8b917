# app/core/dependencies.py
import logging
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import TokenIssuer
from app.database import get_db
from app.domains.file.service import FileService
from app.domains.file.storage import LocalFileStorage
from app.domains.user.service import UserService
from app.exceptions.user import InvalidTokenError
from models import User

logger = logging.getLogger(__name__)

security = HTTPBearer()
token_issuer = TokenIssuer()


async def validate_token(token: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """Validate and decode the bearer access token.

    Returns:
        dict: Decoded token payload

    Raises:
        InvalidTokenError: If token is invalid or expired
    """
    if not token or not token.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication token is required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return token_issuer.verify_token(token.credentials)


async def get_current_user(
    request: Request,
    payload: dict = Depends(validate_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from JWT payload.

    Returns:
        User: Current authenticated user

    Raises:
        HTTPException: If user not found or inactive
    """
    try:
        user_id = UUID(payload["sub"])
    except (KeyError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload - malformed user ID") from e

    user = await UserService(db).get_user_by_id(user_id)

    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive"
        )

    # Add user info to request state for logging
    request.state.user_id = user.id

    return user


def get_file_storage() -> LocalFileStorage:
    return LocalFileStorage()


def get_file_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileService:
    return FileService(db, storage=storage)
