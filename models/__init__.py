"""
Models package initialization.
"""

from .base import Base, BaseModel
from .file import FileRecord
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "FileRecord",
]
