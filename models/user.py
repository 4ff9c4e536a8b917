"""
Provides the User model for the application's database schema.

Attributes
----------
email : sqlalchemy.Column
    The email address of the user, which must be unique.
username : sqlalchemy.Column
    The unique username chosen by the user.
hashed_password : sqlalchemy.Column
    Salted password hash produced by ``app.core.security.hash_password``.
is_active : sqlalchemy.Column
    A boolean indicating if the user is active. Defaults to `True`.

Relationships
-------------
files : sqlalchemy.orm.relationship
    Defines a one-to-many relationship with the `FileRecord` model. Supports
    cascading deletes for related rows.
"""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class User(BaseModel):
    """
    Represents a user entity in the application.

    :ivar email: Email address of the user. It must be unique.
    :type email: str
    :ivar username: Username of the user. It must be unique.
    :type username: str
    :ivar hashed_password: Password hash, never the plain password.
    :type hashed_password: str
    :ivar is_active: Indicates whether the user account is active.
    :type is_active: bool
    """

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)

    files = relationship("FileRecord", back_populates="user", cascade="all, delete-orphan")
