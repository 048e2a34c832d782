# Import every model so Base.metadata knows all tables
from modules.backend.models.base import Base
from modules.backend.models.entry import Entry, EntryTag
from modules.backend.models.user import User

__all__ = ["Base", "Entry", "EntryTag", "User"]
