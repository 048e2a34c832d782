"""
Entries API Endpoints.

REST API endpoints for the current user's entries.
"""

from fastapi import APIRouter, Depends, Query

from modules.backend.core.dependencies import CurrentUser, DbSession, RequestId
from modules.backend.core.pagination import PagedResult, PageParams, get_page_params
from modules.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from modules.backend.schemas.entry import (
    EntryCreate,
    EntryMutationResponse,
    EntryPage,
    EntryResponse,
    EntrySearchResult,
    EntryUpdate,
)
from modules.backend.services.entry import EntryService

router = APIRouter()


def to_entry_page(result: PagedResult) -> EntryPage:
    """Shape a paged query result for the wire."""
    return EntryPage(
        entries=[EntryResponse.model_validate(entry) for entry in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total_entries=result.total,
    )


@router.get(
    "",
    response_model=ApiResponse[EntryPage],
    summary="List my entries",
    description="Get a page of the current user's entries, newest first by default.",
)
async def list_entries(
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
    pagination: PageParams = Depends(get_page_params),
    sort: str | None = Query(
        default=None,
        description="Sort field, prefix with '-' for descending (e.g. -createdAt)",
    ),
) -> ApiResponse[EntryPage]:
    """List the current user's entries."""
    service = EntryService(db)
    result = await service.list_own_entries(user, pagination, sort=sort)
    return ApiResponse(
        data=to_entry_page(result),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/search",
    response_model=ApiResponse[EntrySearchResult],
    summary="Search my entries",
    description="Search by text in title or content, by comma-separated tags, or both.",
)
async def search_entries(
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
    q: str | None = Query(default=None, max_length=200, description="Text to look for"),
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
    sort: str | None = Query(default=None, description="Sort field"),
) -> ApiResponse[EntrySearchResult]:
    """Search the current user's entries."""
    service = EntryService(db)
    entries = await service.search_entries(user, text=q, tags=tags, sort=sort)
    return ApiResponse(
        data=EntrySearchResult(
            entries=[EntryResponse.model_validate(entry) for entry in entries],
            count=len(entries),
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{entry_id}",
    response_model=ApiResponse[EntryResponse],
    summary="Get an entry",
    description="Get one entry the current user owns or that is public. Counts a view.",
)
async def get_entry(
    entry_id: str,
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
) -> ApiResponse[EntryResponse]:
    """Get an entry by ID."""
    service = EntryService(db)
    entry = await service.get_entry(user, entry_id)
    return ApiResponse(
        data=EntryResponse.model_validate(entry),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[EntryMutationResponse],
    status_code=201,
    summary="Create an entry",
    description="Create a new entry owned by the current user.",
)
async def create_entry(
    data: EntryCreate,
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
) -> ApiResponse[EntryMutationResponse]:
    """Create a new entry."""
    service = EntryService(db)
    entry = await service.create_entry(user, data)
    return ApiResponse(
        data=EntryMutationResponse(
            message="Entry created successfully",
            entry=EntryResponse.model_validate(entry),
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{entry_id}",
    response_model=ApiResponse[EntryMutationResponse],
    summary="Update an entry",
    description="Update an entry the current user owns. Only provided fields change.",
)
async def update_entry(
    entry_id: str,
    data: EntryUpdate,
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
) -> ApiResponse[EntryMutationResponse]:
    """Update an entry."""
    service = EntryService(db)
    entry = await service.update_entry(user, entry_id, data)
    return ApiResponse(
        data=EntryMutationResponse(
            message="Entry updated successfully",
            entry=EntryResponse.model_validate(entry),
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{entry_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete an entry",
    description="Permanently delete an entry. Allowed for its author or an admin.",
)
async def delete_entry(
    entry_id: str,
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    """Delete an entry."""
    service = EntryService(db)
    await service.delete_entry(user, entry_id)
    return ApiResponse(
        data=MessageResponse(message="Entry deleted successfully"),
        metadata=ResponseMetadata(request_id=request_id),
    )
