"""
Entry Access Policy.

Pure predicates deciding what a principal may do with an entry. They
take everything they need as arguments and hold no state, so services
call them after confirming the entry exists.

    can_read    author, or anyone when the entry is public
    can_write   author only (role is irrelevant)
    can_delete  author, or any admin
"""

from typing import Protocol

from modules.backend.models.user import ROLE_ADMIN


class Principal(Protocol):
    id: str
    role: str


class OwnedEntry(Protocol):
    author_id: str
    is_public: bool


def is_author(principal: Principal, entry: OwnedEntry) -> bool:
    return principal.id == entry.author_id


def can_read(principal: Principal, entry: OwnedEntry) -> bool:
    return is_author(principal, entry) or bool(entry.is_public)


def can_write(principal: Principal, entry: OwnedEntry) -> bool:
    return is_author(principal, entry)


def can_delete(principal: Principal, entry: OwnedEntry) -> bool:
    return is_author(principal, entry) or principal.role == ROLE_ADMIN
