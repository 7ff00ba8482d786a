"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the full app.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.core.database import get_db_session


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    The client uses the test database session, ensuring all API
    operations use the same session that gets rolled back after the test.
    The app lifespan does not run under ASGITransport, so no DSN is needed.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from guestbook.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_json(response: Any, expected_status: int = 200) -> Any:
        """
        Assert a JSON response with the expected status.

        Returns:
            Decoded JSON body
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        assert response.headers["content-type"].startswith("application/json")
        return response.json()

    @staticmethod
    def assert_created(response: Any) -> None:
        """Assert a 201 response with an empty body."""
        assert response.status_code == 201, (
            f"Expected status 201, got {response.status_code}: {response.text}"
        )
        assert response.content == b""

    @staticmethod
    def assert_plain_error(
        response: Any,
        expected_status: int,
        expected_prefix: str | None = None,
    ) -> str:
        """
        Assert a plain text error response.

        Returns:
            Response body text
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        assert response.headers["content-type"].startswith("text/plain")
        if expected_prefix is not None:
            assert response.text.startswith(expected_prefix), response.text
        return response.text

    @staticmethod
    def assert_validation_error(response: Any, expected_message: str) -> None:
        """Assert a 400 JSON validation error with the given message."""
        data = ApiAssertions.assert_json(response, 400)
        assert data == {"error": expected_message}


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
