"""File-related exceptions."""

from .base import AppPermissionError, NotFoundError


class FileRecordNotFoundError(NotFoundError):
    """Raised when no file metadata row exists for an id."""

    def __init__(self, message: str = "File not found"):
        super().__init__(message=message, error_code="FILE_NOT_FOUND")


class FilePermissionError(AppPermissionError):
    """Raised when a user tries to access another user's file."""

    def __init__(self, message: str = "You don't have permission to access this file"):
        super().__init__(message=message, error_code="FILE_PERMISSION_DENIED")
