"""
Entry Service.

Business logic layer for entries. Every id-addressed operation checks
existence first (404), then the access policy (403), and only then
touches the store.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import AuthorizationError, ValidationError
from modules.backend.core.pagination import PagedResult, PageParams
from modules.backend.core.policy import can_delete, can_read, can_write
from modules.backend.core.utils import utc_now
from modules.backend.models.entry import Entry
from modules.backend.models.user import User
from modules.backend.repositories.entry import DEFAULT_SORT, EntryQuery, EntryRepository, parse_tags
from modules.backend.schemas.entry import EntryCreate, EntryUpdate
from modules.backend.services.base import BaseService


class EntryService(BaseService):
    """
    Service for entry business logic.

    Handles the entry lifecycle (create, read with view counting,
    partial update, delete) and the owner-scoped and admin listings.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = EntryRepository(session)

    async def create_entry(self, principal: User, data: EntryCreate) -> Entry:
        """
        Create a new entry owned by the principal.

        Raises:
            ValidationError: If title or content is missing or blank
        """
        self._validate_required(
            {"title": data.title, "content": data.content},
            ["title", "content"],
        )
        title = data.title.strip()
        self._validate_string_length(title, "title", max_length=255)

        self._log_operation("Creating entry", author_id=principal.id)

        entry = await self._execute_db_operation(
            "create_entry",
            self.repo.create(
                title=title,
                content=data.content.strip(),
                tags=data.tags,
                is_public=bool(data.is_public),
                author_id=principal.id,
                views=0,
            ),
        )

        self._log_debug("Entry created", entry_id=entry.id)
        return entry

    async def get_entry(self, principal: User, entry_id: str) -> Entry:
        """
        Read an entry, counting the view.

        Raises:
            NotFoundError: If the entry does not exist
            AuthorizationError: If the entry is private and not the principal's
        """
        entry = await self._execute_db_operation("get_entry", self.repo.get_by_id(entry_id))

        if not can_read(principal, entry):
            self._log_debug("Entry read denied", entry_id=entry_id, user_id=principal.id)
            raise AuthorizationError()

        return await self._execute_db_operation(
            "increment_views",
            self.repo.increment_views(entry),
        )

    async def update_entry(
        self,
        principal: User,
        entry_id: str,
        data: EntryUpdate,
    ) -> Entry:
        """
        Partially update an entry. Only the author may do this.

        Blank ``title`` or ``content`` values are ignored and the stored
        value is kept. ``tags`` replaces the whole list when supplied.

        Raises:
            NotFoundError: If the entry does not exist
            AuthorizationError: If the principal is not the author
        """
        entry = await self._execute_db_operation("get_entry", self.repo.get_by_id(entry_id))

        if not can_write(principal, entry):
            raise AuthorizationError()

        changes: dict = {}
        if data.title and data.title.strip():
            changes["title"] = data.title.strip()
        if data.content and data.content.strip():
            changes["content"] = data.content.strip()
        if data.tags is not None:
            changes["tags"] = data.tags
        if data.is_public is not None:
            changes["is_public"] = data.is_public

        if not changes:
            return entry

        changes["updated_at"] = utc_now()

        self._log_operation(
            "Updating entry",
            entry_id=entry_id,
            fields=[name for name in changes if name != "updated_at"],
        )

        return await self._execute_db_operation(
            "update_entry",
            self.repo.update(entry, **changes),
        )

    async def delete_entry(self, principal: User, entry_id: str) -> None:
        """
        Permanently delete an entry. Allowed for the author or any admin.

        Raises:
            NotFoundError: If the entry does not exist
            AuthorizationError: If the principal may not delete it
        """
        entry = await self._execute_db_operation("get_entry", self.repo.get_by_id(entry_id))

        if not can_delete(principal, entry):
            raise AuthorizationError()

        self._log_operation("Deleting entry", entry_id=entry_id, user_id=principal.id)

        await self._execute_db_operation(
            "delete_entry",
            self.repo.delete(entry),
        )

    async def admin_delete_entry(self, entry_id: str) -> None:
        """
        Moderation delete, regardless of ownership.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = await self._execute_db_operation("get_entry", self.repo.get_by_id(entry_id))

        self._log_operation("Admin deleting entry", entry_id=entry_id, author_id=entry.author_id)

        await self._execute_db_operation(
            "admin_delete_entry",
            self.repo.delete(entry),
        )

    async def list_own_entries(
        self,
        principal: User,
        pagination: PageParams,
        sort: str | None = None,
    ) -> PagedResult[Entry]:
        """One page of the principal's entries."""
        query = EntryQuery(author_id=principal.id, sort=sort or DEFAULT_SORT)
        return await self._paginate(query, pagination)

    async def list_all_entries(
        self,
        pagination: PageParams,
        sort: str | None = None,
    ) -> PagedResult[Entry]:
        """One page of every entry in the store (admin)."""
        query = EntryQuery(sort=sort or DEFAULT_SORT)
        return await self._paginate(query, pagination)

    async def search_entries(
        self,
        principal: User,
        text: str | None = None,
        tags: str | None = None,
        sort: str | None = None,
    ) -> list[Entry]:
        """
        Search the principal's entries by text and/or tags.

        ``text`` matches title or content case-insensitively; ``tags`` is a
        comma-separated list where any one tag must match. When both are
        given an entry must satisfy both.

        Raises:
            ValidationError: If neither a text nor a tag criterion is given
        """
        query = EntryQuery(
            author_id=principal.id,
            text=text.strip() if text else None,
            tags=parse_tags(tags),
            sort=sort or DEFAULT_SORT,
        )
        if not query.has_criteria:
            raise ValidationError("Please provide a search query or tags")

        self._log_debug("Searching entries", text=query.text, tags=query.tags)
        return await self._execute_db_operation(
            "search_entries",
            self.repo.find(query),
        )

    async def _paginate(self, query: EntryQuery, pagination: PageParams) -> PagedResult[Entry]:
        entries = await self._execute_db_operation(
            "list_entries",
            self.repo.find(query, limit=pagination.limit, offset=pagination.offset),
        )
        total = await self._execute_db_operation(
            "count_entries",
            self.repo.count_matching(query),
        )
        return PagedResult(
            items=entries,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )
