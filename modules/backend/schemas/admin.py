"""
Admin Schemas.

Response shapes for the moderation dashboard statistics.
"""

from modules.backend.schemas.base import CamelModel
from modules.backend.schemas.entry import EntryResponse


class AuthorActivity(CamelModel):
    username: str
    email: str
    entry_count: int


class TagUsage(CamelModel):
    tag: str
    count: int


class DailyCount(CamelModel):
    date: str
    count: int


class StatsResponse(CamelModel):
    """Aggregate statistics across every user and entry."""

    total_users: int
    total_entries: int
    entries_by_user: list[AuthorActivity]
    popular_tags: list[TagUsage]
    recent_entries: list[EntryResponse]
    most_viewed_entries: list[EntryResponse]
    entries_over_time: list[DailyCount]
