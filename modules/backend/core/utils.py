"""
Time Helpers.

Entry and user timestamps are stored as naive datetimes holding UTC, so
SQLite in tests and PostgreSQL in deployment compare and order them the
same way. Anything written to ``created_at`` or ``updated_at`` comes from
``utc_now``.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time with tzinfo stripped."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
