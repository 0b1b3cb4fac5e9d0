"""API test fixtures: app with the ingestion service replaced by a mock."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from study_rag.api.deps import get_ingestion_service
from study_rag.api.main import create_app
from study_rag.application.services import IngestionService


@pytest.fixture
def mock_service():
    return AsyncMock(spec=IngestionService)


@pytest.fixture
def app(mock_service):
    app = create_app()
    app.dependency_overrides[get_ingestion_service] = lambda: mock_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
