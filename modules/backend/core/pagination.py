"""
Pagination Utilities.

Page-number pagination for list endpoints. Clients send ``page`` (1-based)
and ``limit``; responses report the current page, the total number of
matching items and the total number of pages.
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import Query

from modules.backend.core.config import get_app_config

T = TypeVar("T")


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass(frozen=True)
class PageParams:
    """Page number and size extracted from the query string."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Number of items skipped before this page."""
        return (self.page - 1) * self.limit


def _resolve_page_params(page: int, limit: int | None, admin: bool) -> PageParams:
    settings = get_app_config().application.pagination
    if limit is None:
        limit = settings.admin_default_limit if admin else settings.default_limit
    # Oversized pages are served at the maximum size
    return PageParams(page=page, limit=min(limit, settings.max_limit))


def get_page_params(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int | None = Query(default=None, ge=1, description="Items per page"),
) -> PageParams:
    """
    FastAPI dependency for page parameters on owner-scoped listings.

    Usage:
        @router.get("/items")
        async def list_items(pagination: PageParams = Depends(get_page_params)):
            ...
    """
    return _resolve_page_params(page, limit, admin=False)


def get_admin_page_params(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int | None = Query(default=None, ge=1, description="Items per page"),
) -> PageParams:
    """FastAPI dependency for page parameters on admin listings."""
    return _resolve_page_params(page, limit, admin=True)


# =============================================================================
# Paged Result
# =============================================================================


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items, ``limit`` per page."""
    return math.ceil(total / limit)


@dataclass
class PagedResult(Generic[T]):
    """
    One page of a filtered query.

    ``total`` counts the whole filtered set, independent of the slice, so a
    page past the end has no items but still reports the real totals.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)
