"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
All cryptographic operations (bcrypt, JWT) execute for real.
Only the config boundary is stubbed with real Pydantic schema objects.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from jose import jwt as jose_jwt

from modules.backend.core.config_schema import JwtSchema
from modules.backend.core.exceptions import AuthenticationError, ValidationError
from modules.backend.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing-purposes"


@pytest.fixture
def jwt_config():
    """Real Pydantic JwtSchema with test values."""
    return JwtSchema(
        algorithm="HS256",
        access_token_expire_minutes=30,
        audience="test-api",
    )


@pytest.fixture
def _stub_config(jwt_config):
    """Stub the config boundary so security functions can resolve settings."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET)
    app_config = SimpleNamespace(security=SimpleNamespace(jwt=jwt_config))
    with (
        patch("modules.backend.core.security.get_settings", return_value=settings),
        patch("modules.backend.core.security.get_app_config", return_value=app_config),
    ):
        yield


# =============================================================================
# Password Hashing
# =============================================================================


class TestHashPassword:
    """Tests for password hashing, no mocks."""

    def test_returns_hash_different_from_input(self):
        result = hash_password("my-secret-password")
        assert result != "my-secret-password"

    def test_returns_bcrypt_formatted_hash(self):
        result = hash_password("password123")
        assert result.startswith("$2b$")

    def test_same_password_produces_different_hashes(self):
        """Bcrypt salts each hash, so two calls must differ."""
        assert hash_password("identical") != hash_password("identical")

    def test_password_of_72_bytes_is_hashed(self):
        password = "p" * 72
        assert verify_password(password, hash_password(password)) is True

    @pytest.mark.parametrize("password", ["p" * 100, "\u00e9" * 37])
    def test_password_over_72_bytes_is_rejected(self, password):
        with pytest.raises(ValidationError) as exc_info:
            hash_password(password)
        assert "password" in exc_info.value.details


class TestVerifyPassword:
    """Tests for password verification, no mocks."""

    def test_correct_password_verifies(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("correct-horse-battery-staple", hashed) is True

    def test_wrong_password_fails(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("wrong-password", hashed) is False

    def test_unicode_password(self):
        password = "contraseña-sécurité-пароль"
        assert verify_password(password, hash_password(password)) is True

    def test_password_over_72_bytes_never_matches(self):
        hashed = hash_password("p" * 72)
        assert verify_password("p" * 100, hashed) is False


# =============================================================================
# Access Tokens
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestCreateAccessToken:
    """Tests for JWT access token creation and decoding."""

    def test_payload_survives_decoding(self):
        token = create_access_token({"sub": "user-42", "role": "admin"})
        payload = decode_token(token)
        assert payload["sub"] == "user-42"
        assert payload["role"] == "admin"

    def test_token_includes_access_type_and_audience(self):
        payload = decode_token(create_access_token({"sub": "user-1"}))
        assert payload["type"] == "access"
        assert payload["aud"] == "test-api"

    def test_custom_expiration_delta(self):
        short = create_access_token({"sub": "u"}, expires_delta=timedelta(minutes=5))
        long = create_access_token({"sub": "u"}, expires_delta=timedelta(hours=24))
        assert decode_token(long)["exp"] > decode_token(short)["exp"]

    def test_does_not_mutate_input_data(self):
        data = {"sub": "user-1"}
        create_access_token(data)
        assert data == {"sub": "user-1"}


# =============================================================================
# Token Decoding Failures
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestDecodeToken:
    """Tests for token decoding failures."""

    def test_garbage_token_raises_authentication_error(self):
        with pytest.raises(AuthenticationError):
            decode_token("not-a-jwt-token")

    def test_tampered_token_raises_authentication_error(self):
        token = create_access_token({"sub": "user-1"})
        with pytest.raises(AuthenticationError):
            decode_token(token[:-4] + "XXXX")

    def test_wrong_secret_raises_authentication_error(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "access", "aud": "test-api"},
            "completely-different-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_audience_raises_authentication_error(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "access", "aud": "another-api"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_expired_token_raises_authentication_error(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_token_without_subject_is_rejected(self):
        token = create_access_token({"role": "user"})
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_non_access_token_is_rejected(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "refresh", "aud": "test-api"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)
