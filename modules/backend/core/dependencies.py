"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request id
and the identity context that resolves a bearer token to a principal.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.core.exceptions import AuthenticationError, AuthorizationError
from modules.backend.core.logging import get_logger
from modules.backend.models.user import User
from modules.backend.services.user import UserService

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False, description="JWT access token")


async def get_request_id(request: Request) -> str:
    """
    Resolve the request ID for response metadata.

    Prefers the id assigned by RequestContextMiddleware, then the
    X-Request-ID header, and generates one when neither is present.
    """
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or str(uuid.uuid4())
    )


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """
    Resolve the bearer token on the request to the current user.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired,
            or names a user that no longer exists
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required")

    return await UserService(db).resolve_token(credentials.credentials)


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    """
    Require the current user to hold the admin role.

    Raises:
        AuthorizationError: If the user is not an admin
    """
    if not user.is_admin:
        logger.warning("Admin access denied", extra={"user_id": user.id})
        raise AuthorizationError("Admin access required")
    return user


AdminUser = Annotated[User, Depends(require_admin)]
