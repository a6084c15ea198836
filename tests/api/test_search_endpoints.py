"""
Test suite for search, sync and admin indexing endpoints.

System role: Verification of search and index maintenance HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from q5search.api.deps import get_indexing_pipeline, get_retrieval_service
from q5search.api.main import create_app
from q5search.boundary.vdb.vector_schemas import EntityType, SearchMetadata, SearchResult
from q5search.core.exceptions import EmbeddingError, RetrievalError, ValidationError
from q5search.models.indexing import IndexingSummary, ItemError, TypeSummary


@pytest.fixture
def mock_retrieval() -> MagicMock:
    service = MagicMock()
    service.search = AsyncMock(return_value=[
        SearchResult(
            id=1,
            content="Type: Job",
            metadata=SearchMetadata(type=EntityType.JOB, link="job-1", title="QA"),
            similarity=0.8,
        )
    ])
    return service


@pytest.fixture
def mock_pipeline() -> MagicMock:
    pipeline = MagicMock()
    pipeline.sync_entity = AsyncMock()
    pipeline.remove_entity = AsyncMock(return_value=1)
    pipeline.run = AsyncMock()
    return pipeline


@pytest.fixture
def client(mock_retrieval, mock_pipeline) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_retrieval_service] = lambda: mock_retrieval
    app.dependency_overrides[get_indexing_pipeline] = lambda: mock_pipeline
    return TestClient(app)


class TestSearchEndpoint:
    def test_search_should_return_results(self, client, mock_retrieval) -> None:
        response = client.post("/api/v1/search", json={"query": "qa job", "topK": 5})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["results"][0]["metadata"]["link"] == "job-1"
        mock_retrieval.search.assert_awaited_once_with("qa job", 0.1, 5)

    def test_search_should_reject_out_of_range_threshold(self, client) -> None:
        response = client.post("/api/v1/search", json={"query": "qa", "threshold": 2})
        assert response.status_code == 422

    def test_search_should_map_retrieval_error_to_502(self, client, mock_retrieval) -> None:
        mock_retrieval.search.side_effect = RetrievalError("store down")
        response = client.post("/api/v1/search", json={"query": "qa"})
        assert response.status_code == 502


class TestSyncEndpoint:
    def test_sync_should_upsert_by_default(self, client, mock_pipeline) -> None:
        response = client.post("/api/v1/search/sync", json={"type": "job", "data": {"id": "j1", "title": "QA"}})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        mock_pipeline.sync_entity.assert_awaited_once_with(EntityType.JOB, {"id": "j1", "title": "QA"})

    def test_sync_delete_should_remove_document(self, client, mock_pipeline) -> None:
        response = client.post(
            "/api/v1/search/sync",
            json={"type": "organization", "data": {"slug": "acme"}, "action": "delete"},
        )

        assert response.status_code == 200
        mock_pipeline.remove_entity.assert_awaited_once_with(EntityType.ORGANIZATION, {"slug": "acme"})

    def test_sync_missing_link_should_be_400(self, client, mock_pipeline) -> None:
        mock_pipeline.sync_entity.side_effect = ValidationError("Missing slug", field="slug")
        response = client.post("/api/v1/search/sync", json={"type": "organization", "data": {"name": "Acme"}})
        assert response.status_code == 400

    def test_sync_unknown_type_should_fail_validation(self, client) -> None:
        response = client.post("/api/v1/search/sync", json={"type": "event", "data": {"id": "e1"}})
        assert response.status_code == 422

    def test_sync_provider_failure_should_be_502(self, client, mock_pipeline) -> None:
        mock_pipeline.sync_entity.side_effect = EmbeddingError("down", provider="openai")
        response = client.post("/api/v1/search/sync", json={"type": "job", "data": {"id": "j1"}})
        assert response.status_code == 502


class TestAdminIndexEndpoint:
    def test_index_should_return_camel_case_summary(self, client, mock_pipeline) -> None:
        # Arrange
        summary = IndexingSummary()
        summary.merge(
            EntityType.JOB,
            TypeSummary(fetched=2, inserted=1, failed=1),
            [ItemError(entity_type=EntityType.JOB, link="bad", error="missing title")],
        )
        mock_pipeline.run.return_value = summary

        # Act
        response = client.post("/api/v1/admin/index-search-db")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["insertedCount"] == 1
        assert body["skippedCount"] == 0
        assert body["errors"] == [{"entityType": "job", "link": "bad", "error": "missing title"}]
        mock_pipeline.run.assert_awaited_once_with(None)

    def test_index_should_accept_type_filter(self, client, mock_pipeline) -> None:
        mock_pipeline.run.return_value = IndexingSummary()

        client.post("/api/v1/admin/index-search-db?types=job&types=product")

        mock_pipeline.run.assert_awaited_once_with([EntityType.JOB, EntityType.PRODUCT])
