"""
Auth API Endpoints.

Account registration, login and the current-user lookup.
"""

from fastapi import APIRouter

from modules.backend.core.config import get_app_config
from modules.backend.core.dependencies import CurrentUser, DbSession, RequestId
from modules.backend.core.exceptions import AuthorizationError
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.user import (
    RegisterResponse,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from modules.backend.services.user import UserService, issue_token

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    status_code=201,
    summary="Register",
)
async def register(
    data: UserRegister,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[RegisterResponse]:
    """Create an account and return a token for it."""
    if not get_app_config().features.auth_registration_enabled:
        raise AuthorizationError("Registration is disabled")

    user = await UserService(db).register(data)
    return ApiResponse(
        data=RegisterResponse(
            message="User registered successfully",
            token=issue_token(user),
            user=UserResponse.model_validate(user),
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in",
)
async def login(
    data: UserLogin,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TokenResponse]:
    """Exchange email and password for an access token."""
    user = await UserService(db).authenticate(data)
    return ApiResponse(
        data=TokenResponse(token=issue_token(user), user=UserResponse.model_validate(user)),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
)
async def me(user: CurrentUser, request_id: RequestId) -> ApiResponse[UserResponse]:
    """Return the authenticated user."""
    return ApiResponse(
        data=UserResponse.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )
