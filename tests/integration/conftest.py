"""
Integration Test Fixtures.

Fixtures for integration tests - the real application wired to the
per-test database from the root conftest.py. Only the secrets boundary
is stubbed so tokens can be signed without config/.env.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.core.security import hash_password
from modules.backend.models.entry import Entry
from modules.backend.models.user import ROLE_ADMIN, ROLE_USER, User
from modules.backend.services.user import issue_token

TEST_JWT_SECRET = "integration-test-secret-key-long-enough-for-hs256"
TEST_PASSWORD = "secret123"


# =============================================================================
# Secrets
# =============================================================================


@pytest.fixture(autouse=True)
def _stub_secrets() -> Generator[None, None, None]:
    """Sign and verify tokens with a fixed test secret."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET, db_password="unused")
    with patch("modules.backend.core.security.get_settings", return_value=settings):
        yield


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    Every request shares the test session, so rows created through
    ``db_session`` are visible to the API and vice versa.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from modules.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# User Fixtures
# =============================================================================


async def make_user(
    db_session: AsyncSession,
    username: str,
    role: str = ROLE_USER,
) -> User:
    """Insert a user with TEST_PASSWORD directly into the test database."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=hash_password(TEST_PASSWORD),
        role=role,
    )
    db_session.add(user)
    await db_session.flush()
    return user


def auth_headers_for(user: User) -> dict[str, str]:
    """Bearer headers carrying a fresh access token for the user."""
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture
async def alice(db_session: AsyncSession) -> User:
    return await make_user(db_session, "alice")


@pytest.fixture
async def bob(db_session: AsyncSession) -> User:
    return await make_user(db_session, "bob")


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "root", role=ROLE_ADMIN)


@pytest.fixture
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers_for(alice)


@pytest.fixture
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers_for(bob)


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers_for(admin_user)


# =============================================================================
# Entry Fixtures
# =============================================================================


@pytest.fixture
def seed_entry(db_session: AsyncSession) -> Callable[..., Awaitable[Entry]]:
    """
    Factory inserting entries directly, bypassing the API.

    Usage:
        entry = await seed_entry(alice, title="Draft", tags=["python"])
    """
    async def _seed(
        author: User,
        title: str = "Seeded",
        content: str = "Seeded content",
        tags: list[str] | None = None,
        is_public: bool = False,
        created_at: datetime | None = None,
    ) -> Entry:
        entry = Entry(
            title=title,
            content=content,
            author_id=author.id,
            tags=tags,
            is_public=is_public,
            views=0,
        )
        if created_at is not None:
            entry.created_at = created_at
            entry.updated_at = created_at
        db_session.add(entry)
        await db_session.flush()
        return entry

    return _seed


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (400).

        Args:
            response: httpx Response object
            field: Expected field with validation error (optional)
        """
        data = ApiAssertions.assert_error(response, 400, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
