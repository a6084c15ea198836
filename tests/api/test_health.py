"""
Test suite for health endpoints.

System role: Verification of health check HTTP API
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from q5search.api.main import create_app
from q5search.boundary.db.connection import get_async_db
from q5search.configs.settings import Settings


@pytest.fixture
def mock_db() -> AsyncMock:
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def client(mock_db) -> TestClient:
    app = create_app()

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_should_echo_correlation_id(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_health_check_db(client, mock_db):
    response = client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    mock_db.execute.assert_awaited_once()


def test_health_check_db_unavailable(client, mock_db):
    mock_db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
    response = client.get("/api/v1/health/db")
    assert response.status_code == 503


@pytest.mark.parametrize("debug", [True, False])
def test_create_app_should_follow_debug_setting(debug):
    app = create_app(Settings(debug=debug))
    assert app.debug is debug
