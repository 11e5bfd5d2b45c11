"""Tests for the health check endpoint."""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.api.health import check_database, get_uptime_seconds, set_app_start_time
from lessonbook.core.db import get_db
from lessonbook.main import create_app


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """Create a test client for the FastAPI app with database dependency override."""
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


class TestHealthCheckEndpoint:
    """Test suite for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_endpoint_returns_200_when_db_ok(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["uptime_seconds"] >= 0
        assert data["checks"]["database"]["status"] == "ok"
        assert isinstance(data["checks"]["database"]["response_time_ms"], int)

    @pytest.mark.asyncio
    async def test_health_endpoint_content_type(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert "application/json" in response.headers["content-type"]

    def test_health_endpoint_uptime_tracking(self) -> None:
        """Test that uptime increases over time."""
        one_hour_ago = datetime.now() - timedelta(hours=1)
        set_app_start_time(one_hour_ago)

        uptime = get_uptime_seconds()

        assert 3590 <= uptime <= 3610, f"Expected ~3600 seconds, got {uptime}"

    @pytest.mark.asyncio
    async def test_database_down_is_reported_not_raised(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        result = await check_database(db)

        assert result["status"] == "down"
        assert result["error"] == "OperationalError"
