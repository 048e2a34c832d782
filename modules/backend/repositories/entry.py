"""
Entry Repository.

Data access layer for entries, including the query composer used by
listings and search: an ``EntryQuery`` describes scope, filters and sort
order, and the repository turns it into a single SELECT (plus a matching
COUNT for pagination).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import ValidationError
from modules.backend.models.entry import Entry, EntryTag, normalize_tags
from modules.backend.models.user import User
from modules.backend.repositories.base import BaseRepository

DEFAULT_SORT = "-createdAt"

SORTABLE_FIELDS: dict[str, Any] = {
    "createdAt": Entry.created_at,
    "created_at": Entry.created_at,
    "updatedAt": Entry.updated_at,
    "updated_at": Entry.updated_at,
    "title": Entry.title,
    "views": Entry.views,
}
SORT_FIELD_NAMES = ("createdAt", "updatedAt", "title", "views")


def parse_tags(raw: str | None) -> list[str]:
    """
    Split a comma-separated tag filter into normalized terms.

    >>> parse_tags("A,b , C")
    ['a', 'b', 'c']
    """
    if not raw:
        return []
    return normalize_tags(raw.split(","))


def parse_sort(raw: str | None) -> tuple[Any, bool]:
    """
    Resolve a sort key such as ``-createdAt`` to (column, descending).

    Raises:
        ValidationError: If the field is not sortable
    """
    key = (raw or DEFAULT_SORT).strip()
    descending = key.startswith("-")
    field = key.lstrip("+-")
    column = SORTABLE_FIELDS.get(field)
    if column is None:
        raise ValidationError(
            "Invalid sort field",
            details={"sort": f"Must be one of: {', '.join(SORT_FIELD_NAMES)}"},
        )
    return column, descending


@dataclass
class EntryQuery:
    """
    Filter and ordering for an entry listing.

    author_id: restrict to one owner; None means the whole store
    text:      case-insensitive substring of title or content
    tags:      normalized tag terms; any one of them must be present
    sort:      field name, ``-`` prefix for descending
    """

    author_id: str | None = None
    text: str | None = None
    tags: list[str] | None = None
    sort: str = DEFAULT_SORT

    @property
    def has_criteria(self) -> bool:
        return bool(self.text) or bool(self.tags)

    def conditions(self) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        if self.author_id is not None:
            clauses.append(Entry.author_id == self.author_id)
        if self.text:
            clauses.append(
                or_(
                    Entry.title.icontains(self.text, autoescape=True),
                    Entry.content.icontains(self.text, autoescape=True),
                )
            )
        if self.tags:
            clauses.append(Entry.tag_links.any(EntryTag.name.in_(self.tags)))
        return clauses


class EntryRepository(BaseRepository[Entry]):
    """
    Repository for Entry model.

    Inherits standard CRUD operations from BaseRepository
    and adds the composed listing queries.
    """

    model = Entry

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _select(self, query: EntryQuery) -> Select:
        column, descending = parse_sort(query.sort)
        order = column.desc() if descending else column.asc()
        return (
            select(Entry)
            .where(*query.conditions())
            .order_by(order, Entry.id)
        )

    async def find(
        self,
        query: EntryQuery,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Entry]:
        """
        Run a composed query.

        Args:
            query: Scope, filters and sort order
            limit: Maximum number of entries (None for all)
            offset: Number of entries to skip

        Returns:
            Matching entries, authors and tags loaded
        """
        stmt = self._select(query).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all())

    async def count_matching(self, query: EntryQuery) -> int:
        """Count entries matching the query, ignoring any page slice."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Entry)
            .where(*query.conditions())
        )
        return result.scalar_one()

    async def increment_views(self, entry: Entry) -> Entry:
        """
        Add one view with a single atomic UPDATE and reload the counter.

        A view is not an edit, so updated_at is written back unchanged.
        """
        await self.session.execute(
            update(Entry)
            .where(Entry.id == entry.id)
            .values(views=Entry.views + 1, updated_at=Entry.updated_at)
            .execution_options(synchronize_session=False)
        )
        await self.session.refresh(entry, attribute_names=["views"])
        return entry

    # -------------------------------------------------------------------------
    # Aggregates for the admin dashboard
    # -------------------------------------------------------------------------

    async def count_by_author(self) -> list[tuple[str, str, int]]:
        """(username, email, entry count) per author, most prolific first."""
        entry_count = func.count(Entry.id).label("entry_count")
        result = await self.session.execute(
            select(User.username, User.email, entry_count)
            .join(Entry, Entry.author_id == User.id)
            .group_by(User.id, User.username, User.email)
            .order_by(entry_count.desc(), User.username)
        )
        return [tuple(row) for row in result.all()]

    async def popular_tags(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most used tag names with their usage counts."""
        usage = func.count(EntryTag.id).label("usage")
        result = await self.session.execute(
            select(EntryTag.name, usage)
            .group_by(EntryTag.name)
            .order_by(usage.desc(), EntryTag.name)
            .limit(limit)
        )
        return [tuple(row) for row in result.all()]

    async def counts_per_day(self, since: datetime) -> list[tuple[str, int]]:
        """Entries created per calendar day since ``since``, oldest day first."""
        day = func.date(Entry.created_at).label("day")
        result = await self.session.execute(
            select(day, func.count(Entry.id))
            .where(Entry.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        return [(str(row[0]), row[1]) for row in result.all()]
