"""User and authentication exceptions."""

from .base import BaseAppException, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message=message, error_code="USER_NOT_FOUND")


class UserAlreadyExistsError(BaseAppException):
    """Raised when the email or username is already taken."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message=message, status_code=409, error_code="USER_ALREADY_EXISTS")


class InvalidCredentialsError(BaseAppException):
    """Raised when login credentials do not match."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message=message, status_code=401, error_code="INVALID_CREDENTIALS")


class InvalidTokenError(BaseAppException):
    """Raised when a bearer or refresh token cannot be trusted."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message=message, status_code=401, error_code="INVALID_TOKEN")
