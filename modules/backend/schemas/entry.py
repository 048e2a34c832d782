"""
Entry Schemas.

Pydantic schemas for entry API request/response validation.
"""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from modules.backend.models.entry import TAG_MAX_LENGTH
from modules.backend.schemas.base import CamelModel

TagName = Annotated[str, Field(max_length=TAG_MAX_LENGTH)]


class EntryCreate(CamelModel):
    """
    Schema for creating a new entry.

    Title and content are checked for blankness by the service so that
    whitespace-only values are rejected the same way as missing ones.
    """

    title: str | None = Field(
        default=None,
        max_length=255,
        description="Entry title",
        examples=["React hooks cheatsheet"],
    )
    content: str | None = Field(
        default=None,
        description="Markdown body",
        examples=["# Hooks\n\n`useState` keeps local state."],
    )
    tags: list[TagName] | None = Field(
        default=None,
        description="Tag names; trimmed and lowercased on save",
        examples=[["React", "Tutorial"]],
    )
    is_public: bool | None = Field(
        default=None,
        description="Whether other users may read the entry",
    )


class EntryUpdate(CamelModel):
    """
    Schema for updating an existing entry.

    Every field is optional. A blank title or content is treated as not
    supplied; tags, when present, replace the whole tag list.
    """

    title: str | None = Field(default=None, max_length=255, description="Entry title")
    content: str | None = Field(default=None, description="Markdown body")
    tags: list[TagName] | None = Field(default=None, description="Replacement tag list")
    is_public: bool | None = Field(default=None, description="Visibility flag")


class AuthorSummary(CamelModel):
    """The author fields exposed alongside an entry."""

    id: str
    username: str
    email: str


class EntryResponse(CamelModel):
    """Schema for an entry in API responses."""

    id: str = Field(description="Entry unique identifier")
    title: str
    content: str
    tags: list[str]
    author: AuthorSummary
    is_public: bool
    views: int
    created_at: datetime
    updated_at: datetime


class EntryPage(CamelModel):
    """One page of a listing."""

    entries: list[EntryResponse]
    total_pages: int
    current_page: int
    total_entries: int


class EntrySearchResult(CamelModel):
    """Every entry matching a search."""

    entries: list[EntryResponse]
    count: int


class EntryMutationResponse(CamelModel):
    """Acknowledgement carrying the saved entry."""

    message: str
    entry: EntryResponse
