"""
Test suite for RecommendationService.

System role: Verification of profile-driven job recommendations
"""

from unittest.mock import AsyncMock

import pytest

from conftest import FakePlatformReader
from q5search.application.services.recommendation_service import RecommendationService
from q5search.boundary.vdb.vector_schemas import EntityType, ProviderId, SearchDocument, SearchMetadata
from q5search.core.exceptions import ProfileNotFoundError, RetrievalError, ValidationError


async def seed(store, keyword_embeddings, entity_type, link, content):
    await store.insert(SearchDocument(
        content=content,
        embedding=keyword_embeddings.embed_query(content),
        metadata=SearchMetadata(type=entity_type, link=link, provider=ProviderId.OPENAI),
    ))


@pytest.fixture
async def qubit_index(document_store, keyword_embeddings):
    for i in range(3):
        await seed(document_store, keyword_embeddings, EntityType.JOB, f"job-{i}",
                   f"Type: Job Title: Superconducting Qubits Engineer {i}")
    for i in range(2):
        await seed(document_store, keyword_embeddings, EntityType.PRODUCT, f"prod-{i}",
                   f"Type: Product Name: Superconducting Qubits Chip {i}")
    keyword_embeddings.calls.clear()
    return document_store


def make_service(retrieval_service, retrieval_settings, profiles) -> RecommendationService:
    return RecommendationService(retrieval_service, FakePlatformReader(profiles=profiles), retrieval_settings)


class TestRecommendJobs:
    @pytest.mark.asyncio
    async def test_should_return_only_jobs_capped_at_two(
        self, retrieval_service, retrieval_settings, qubit_index, user_id
    ) -> None:
        # Arrange
        service = make_service(retrieval_service, retrieval_settings, {user_id: {"skills": "superconducting qubits"}})

        # Act
        job_ids = await service.recommend_jobs(user_id)

        # Assert
        assert 0 < len(job_ids) <= 2
        assert all(job_id.startswith("job-") for job_id in job_ids)

    @pytest.mark.asyncio
    async def test_limit_parameter_should_widen_cap(
        self, retrieval_service, retrieval_settings, qubit_index, user_id
    ) -> None:
        service = make_service(retrieval_service, retrieval_settings, {user_id: {"skills": "superconducting qubits"}})

        job_ids = await service.recommend_jobs(user_id, limit=5)

        assert sorted(job_ids) == ["job-0", "job-1", "job-2"]

    @pytest.mark.asyncio
    async def test_empty_profile_text_should_return_nothing_without_embedding(
        self, retrieval_service, retrieval_settings, qubit_index, keyword_embeddings, user_id
    ) -> None:
        service = make_service(
            retrieval_service, retrieval_settings,
            {user_id: {"role": "", "skills": None, "focus_areas": " ", "short_bio": None}},
        )

        assert await service.recommend_jobs(user_id) == []
        assert keyword_embeddings.calls == []

    @pytest.mark.asyncio
    async def test_missing_user_id_should_raise_validation_error(self, retrieval_service, retrieval_settings) -> None:
        with pytest.raises(ValidationError):
            await make_service(retrieval_service, retrieval_settings, {}).recommend_jobs(None)

    @pytest.mark.asyncio
    async def test_unknown_profile_should_raise_not_found(self, retrieval_service, retrieval_settings, user_id) -> None:
        with pytest.raises(ProfileNotFoundError):
            await make_service(retrieval_service, retrieval_settings, {}).recommend_jobs(user_id)

    @pytest.mark.asyncio
    async def test_retrieval_failure_should_propagate(self, retrieval_settings, user_id) -> None:
        retrieval = AsyncMock()
        retrieval.search_links.side_effect = RetrievalError("embedding failed")
        service = RecommendationService(
            retrieval, FakePlatformReader(profiles={user_id: {"skills": "qubits"}}), retrieval_settings
        )

        with pytest.raises(RetrievalError):
            await service.recommend_jobs(user_id)

    @pytest.mark.asyncio
    async def test_should_query_with_configured_threshold_and_pool(self, retrieval_settings, user_id) -> None:
        retrieval = AsyncMock()
        retrieval.search_links.return_value = ["j1", "j2", "j3"]
        service = RecommendationService(
            retrieval, FakePlatformReader(profiles={user_id: {"role": "Engineer"}}), retrieval_settings
        )

        assert await service.recommend_jobs(user_id) == ["j1", "j2"]
        retrieval.search_links.assert_awaited_once_with(
            "Role: Engineer", EntityType.JOB, threshold=0.1, top_k=50
        )
