"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Services built on it get their repositories patched per test.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = EntryService(mock_db_session)
    """
    session = AsyncMock()
    session.add = MagicMock()
    return session
