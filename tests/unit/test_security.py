"""
Unit tests for password hashing and token issuing.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenIssuer,
    hash_password,
    verify_password,
)
from app.exceptions.user import InvalidTokenError

SECRET = "unit-test-secret-key-with-32-bytes!"


class TestPasswordHashing:
    """Test cases for password hashing."""

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass", iterations=1000)

        assert hashed != "s3cret-pass"
        assert hashed.startswith("pbkdf2_sha256$1000$")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_salts_differ(self):
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    def test_malformed_hash(self):
        assert not verify_password("anything", "not-a-hash")
        assert not verify_password("anything", "md5$1$abc$def")


class TestTokenIssuer:
    """Test cases for TokenIssuer."""

    def setup_method(self):
        self.issuer = TokenIssuer(secret_key=SECRET, algorithm="HS256")
        self.user_id = uuid.uuid4()

    def test_token_pair_round_trip(self):
        pair = self.issuer.create_token_pair(self.user_id, "alice")

        access = self.issuer.verify_token(pair.access_token)
        refresh = self.issuer.verify_token(pair.refresh_token, expected_type=REFRESH_TOKEN_TYPE)

        assert access["sub"] == str(self.user_id)
        assert access["username"] == "alice"
        assert access["type"] == ACCESS_TOKEN_TYPE
        assert refresh["type"] == REFRESH_TOKEN_TYPE
        assert pair.token_type == "bearer"

    def test_refresh_token_rejected_as_access(self):
        pair = self.issuer.create_token_pair(self.user_id, "alice")

        with pytest.raises(InvalidTokenError, match="Token type must be 'access'"):
            self.issuer.verify_token(pair.refresh_token)

    def test_foreign_signature_rejected(self):
        other = TokenIssuer(secret_key=SECRET[::-1], algorithm="HS256")
        pair = other.create_token_pair(self.user_id, "alice")

        with pytest.raises(InvalidTokenError) as exc_info:
            self.issuer.verify_token(pair.access_token)

        assert exc_info.value.status_code == 401

    def test_expired_token_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": str(self.user_id), "type": "access", "exp": now - timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.issuer.verify_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode({"type": "access"}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError, match="missing user ID"):
            self.issuer.verify_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            self.issuer.verify_token("not.a.jwt")
