"""
Entry Model.

Database models for knowledge-base entries and their tags.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modules.backend.models.base import Base, TimestampMixin, UUIDMixin
from modules.backend.models.user import User

TAG_MAX_LENGTH = 100


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim and lowercase tag names, dropping blanks. Order is preserved."""
    if not tags:
        return []
    normalized = (tag.strip().lower() for tag in tags)
    return [tag for tag in normalized if tag]


class EntryTag(Base):
    """
    One tag attached to an entry.

    ``position`` keeps the order the tags were supplied in.
    """

    __tablename__ = "entry_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[str] = mapped_column(
        ForeignKey("entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(TAG_MAX_LENGTH), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<EntryTag(entry_id={self.entry_id}, name={self.name!r})>"


class Entry(UUIDMixin, TimestampMixin, Base):
    """
    Entry database model.

    A markdown note owned by exactly one user. ``author_id`` is written
    once at creation; ``views`` only ever grows.
    """

    __tablename__ = "entries"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    views: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    author: Mapped[User] = relationship(lazy="joined")
    tag_links: Mapped[list[EntryTag]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by=EntryTag.position,
    )

    @property
    def tags(self) -> list[str]:
        return [link.name for link in self.tag_links]

    @tags.setter
    def tags(self, values: list[str] | None) -> None:
        self.tag_links = [
            EntryTag(position=index, name=name)
            for index, name in enumerate(normalize_tags(values))
        ]

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, title={self.title!r}, author_id={self.author_id})>"
