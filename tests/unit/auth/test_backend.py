"""Unit tests for auth backend (JWT and password handling)."""

from datetime import timedelta
from uuid import uuid4

import pytest

from journal.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """hash_password should return a bcrypt hash."""
        hashed = hash_password("Secret-pass1")

        assert hashed != "Secret-pass1"
        assert hashed.startswith("$2b$")

    def test_verify_password(self):
        hashed = hash_password("Secret-pass1")

        assert verify_password("Secret-pass1", hashed) is True
        assert verify_password("secret-pass1", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_round_trip_claims(self):
        user_id = uuid4()

        token_data = decode_token(create_access_token(user_id))

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.type == "access"
        assert token_data.jti

    def test_tokens_are_unique(self):
        user_id = uuid4()

        assert create_access_token(user_id) != create_access_token(user_id)

    def test_expired_token(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not.a.jwt") is None
