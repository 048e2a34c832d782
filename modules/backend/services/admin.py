"""
Admin Service.

Aggregate statistics for the moderation dashboard.
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.utils import utc_now
from modules.backend.repositories.entry import EntryQuery, EntryRepository
from modules.backend.repositories.user import UserRepository
from modules.backend.schemas.admin import (
    AuthorActivity,
    DailyCount,
    StatsResponse,
    TagUsage,
)
from modules.backend.schemas.entry import EntryResponse
from modules.backend.services.base import BaseService

TOP_N = 10
ACTIVITY_WINDOW_DAYS = 30


class AdminService(BaseService):
    """Read-only rollups over every user and entry."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.entries = EntryRepository(session)
        self.users = UserRepository(session)

    async def get_stats(self) -> StatsResponse:
        """Collect the dashboard statistics."""
        self._log_debug("Collecting admin statistics")
        return await self._execute_db_operation("get_stats", self._collect())

    async def _collect(self) -> StatsResponse:
        since = utc_now() - timedelta(days=ACTIVITY_WINDOW_DAYS)

        recent = await self.entries.find(EntryQuery(sort="-createdAt"), limit=TOP_N)
        most_viewed = await self.entries.find(EntryQuery(sort="-views"), limit=TOP_N)

        return StatsResponse(
            total_users=await self.users.count(),
            total_entries=await self.entries.count(),
            entries_by_user=[
                AuthorActivity(username=username, email=email, entry_count=count)
                for username, email, count in await self.entries.count_by_author()
            ],
            popular_tags=[
                TagUsage(tag=name, count=count)
                for name, count in await self.entries.popular_tags(TOP_N)
            ],
            recent_entries=[EntryResponse.model_validate(e) for e in recent],
            most_viewed_entries=[EntryResponse.model_validate(e) for e in most_viewed],
            entries_over_time=[
                DailyCount(date=day, count=count)
                for day, count in await self.entries.counts_per_day(since)
            ],
        )
