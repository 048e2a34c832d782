"""
Security Utilities.

Password hashing and bearer token helpers.
"""

from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from modules.backend.core.config import get_app_config, get_settings
from modules.backend.core.exceptions import AuthenticationError, ValidationError
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now

logger = get_logger(__name__)

# bcrypt only looks at this many bytes and newer releases refuse longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Raises:
        ValidationError: If the UTF-8 encoded password exceeds 72 bytes
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(
            "password too long",
            details={"password": f"Maximum length is {BCRYPT_MAX_PASSWORD_BYTES} bytes"},
        )
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Over-long input never matches."""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode (``sub`` carries the user id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid, expired, or not an access token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return payload
