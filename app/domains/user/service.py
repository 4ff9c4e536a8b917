# app/domains/user/service.py
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password, verify_password
from app.exceptions.base import PersistenceError
from app.exceptions.user import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from models import User


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def register_user(self, email: str, username: str, password: str) -> User:
        """Create a new user after checking email and username are free."""
        if await self.get_user_by_email(email):
            raise UserAlreadyExistsError("email already registered")
        if await self.get_user_by_username(username):
            raise UserAlreadyExistsError("username already taken")

        user = User(email=email, username=username, hashed_password=hash_password(password))

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except IntegrityError as e:
            # Lost a race with a concurrent write of the same email or username
            await self.db.rollback()
            raise UserAlreadyExistsError("email or username already taken") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to create user: {str(e)}") from e

    async def authenticate(self, email: str, password: str) -> User:
        """Return the active user matching the credentials."""
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise InvalidCredentialsError("User account is inactive")
        return user

    async def update_user(
        self, user_id: UUID, username: str = None, email: str = None
    ) -> User:
        """Update user profile information."""
        user = await self.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        if email is not None and email != user.email and await self.get_user_by_email(email):
            raise UserAlreadyExistsError("email already registered")
        if (
            username is not None
            and username != user.username
            and await self.get_user_by_username(username)
        ):
            raise UserAlreadyExistsError("username already taken")

        try:
            if username is not None:
                user.username = username
            if email is not None:
                user.email = email

            await self.db.commit()
            await self.db.refresh(user)
            return user
        except IntegrityError as e:
            # Lost a race with a concurrent write of the same email or username
            await self.db.rollback()
            raise UserAlreadyExistsError("email or username already taken") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to update user: {str(e)}") from e

