"""Tests for the health endpoints."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db import get_async_db


@pytest.fixture
def db_session(app):
    session = AsyncMock(spec=AsyncSession)

    async def _override():
        yield session

    app.dependency_overrides[get_async_db] = _override
    return session


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client, db_session):
    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    db_session.execute.assert_awaited_once()


def test_health_check_db_unavailable(client, db_session):
    db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json()["detail"] == "Database unavailable"
