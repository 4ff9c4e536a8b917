"""Security related functions."""

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel

from app.core.config import settings
from app.exceptions.user import InvalidTokenError

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 390000

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hash a password as ``algorithm$iterations$salt$digest``."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        [
            PBKDF2_ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        algorithm, iterations, salt, digest = hashed_password.split("$")
        salt_bytes = base64.b64decode(salt)
        expected = base64.b64decode(digest)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt_bytes, rounds)
    return hmac.compare_digest(candidate, expected)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenIssuer:
    """
    Issues and verifies the JSON Web Tokens used for bearer authentication.

    Access and refresh tokens are signed with the same secret and told apart by
    their ``type`` claim, so a refresh token is never accepted where an access
    token is expected and vice versa.

    :ivar secret_key: The secret used to sign tokens.
    :type secret_key: str
    :ivar algorithm: The JWT signing algorithm.
    :type algorithm: str
    """

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None):
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm

    def _encode(self, user_id: UUID, username: str, token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "username": username,
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_token_pair(self, user_id: UUID, username: str) -> TokenPair:
        return TokenPair(
            access_token=self._encode(
                user_id,
                username,
                ACCESS_TOKEN_TYPE,
                timedelta(minutes=settings.access_token_expire_minutes),
            ),
            refresh_token=self._encode(
                user_id,
                username,
                REFRESH_TOKEN_TYPE,
                timedelta(minutes=settings.refresh_token_expire_minutes),
            ),
        )

    def verify_token(self, token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> dict:
        """
        Decode a token and check its signature, expiry and type.

        :param token: The encoded JWT.
        :param expected_type: ``access`` or ``refresh``.
        :return: The decoded payload.
        :raises InvalidTokenError: If the token is malformed, expired, signed with
            another key, of the wrong type or missing its subject.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Authentication token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid authentication token: {str(e)}") from e

        if payload.get("type") != expected_type:
            raise InvalidTokenError(f"Token type must be '{expected_type}'")
        if not payload.get("sub"):
            raise InvalidTokenError("Invalid token payload - missing user ID")
        return payload
