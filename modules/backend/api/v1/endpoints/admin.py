"""
Admin API Endpoints.

Moderation and statistics endpoints. Every route requires the admin role.
"""

from fastapi import APIRouter, Depends, Query

from modules.backend.api.v1.endpoints.entries import to_entry_page
from modules.backend.core.dependencies import AdminUser, DbSession, RequestId
from modules.backend.core.pagination import PageParams, get_admin_page_params
from modules.backend.schemas.admin import StatsResponse
from modules.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from modules.backend.schemas.entry import EntryPage
from modules.backend.schemas.user import (
    RoleUpdate,
    UserDetailResponse,
    UserMutationResponse,
    UserResponse,
)
from modules.backend.services.admin import AdminService
from modules.backend.services.entry import EntryService
from modules.backend.services.user import UserService

router = APIRouter()


@router.get(
    "/stats",
    response_model=ApiResponse[StatsResponse],
    summary="Dashboard statistics",
)
async def get_stats(
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
) -> ApiResponse[StatsResponse]:
    """Aggregate statistics across all users and entries."""
    stats = await AdminService(db).get_stats()
    return ApiResponse(data=stats, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/users",
    response_model=ApiResponse[list[UserDetailResponse]],
    summary="List users",
)
async def list_users(
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
) -> ApiResponse[list[UserDetailResponse]]:
    """Every user, newest first, without credentials."""
    users = await UserService(db).list_users()
    return ApiResponse(
        data=[UserDetailResponse.model_validate(user) for user in users],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/entries",
    response_model=ApiResponse[EntryPage],
    summary="List all entries",
    description="Get a page of entries from every user.",
)
async def list_all_entries(
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
    pagination: PageParams = Depends(get_admin_page_params),
    sort: str | None = Query(default=None, description="Sort field"),
) -> ApiResponse[EntryPage]:
    """List entries across all users."""
    result = await EntryService(db).list_all_entries(pagination, sort=sort)
    return ApiResponse(
        data=to_entry_page(result),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/entries/{entry_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete any entry",
)
async def delete_any_entry(
    entry_id: str,
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    """Delete an entry regardless of its owner."""
    await EntryService(db).admin_delete_entry(entry_id)
    return ApiResponse(
        data=MessageResponse(message="Entry deleted successfully by admin"),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/users/{user_id}/role",
    response_model=ApiResponse[UserMutationResponse],
    summary="Change a user's role",
)
async def update_user_role(
    user_id: str,
    data: RoleUpdate,
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
) -> ApiResponse[UserMutationResponse]:
    """Set a user's role to 'user' or 'admin'."""
    user = await UserService(db).update_role(user_id, data.role)
    return ApiResponse(
        data=UserMutationResponse(
            message="User role updated successfully",
            user=UserResponse.model_validate(user),
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
