"""
Test suite for FeedService.

System role: Verification of personalized feed composition
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from conftest import FakePlatformReader
from q5search.application.services.feed_service import FeedService
from q5search.boundary.vdb.vector_schemas import EntityType, ProviderId, SearchDocument, SearchMetadata
from q5search.core.exceptions import DocumentStoreError, RetrievalError
from q5search.core.platform_reader import PlatformReader


async def seed_post(store, keyword_embeddings, link, content):
    await store.insert(SearchDocument(
        content=content,
        embedding=keyword_embeddings.embed_query(content),
        metadata=SearchMetadata(type=EntityType.POST, link=link, provider=ProviderId.OPENAI),
    ))


class TestComposeFeed:
    @pytest.mark.asyncio
    async def test_anonymous_viewer_should_get_empty_feed(self, retrieval_settings) -> None:
        reader = AsyncMock()
        service = FeedService(AsyncMock(), reader, retrieval_settings)

        feed = await service.compose(None)

        assert feed.post_ids == []
        assert feed.meta.social_count == 0
        reader.get_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_connections_and_empty_profile_should_give_empty_feed(
        self, retrieval_service, retrieval_settings, keyword_embeddings, user_id
    ) -> None:
        # Arrange
        reader = FakePlatformReader(
            profiles={user_id: {"role": "", "skills": "", "focus_areas": "", "short_bio": ""}}
        )
        service = FeedService(retrieval_service, reader, retrieval_settings)

        # Act
        feed = await service.compose(user_id)

        # Assert
        assert feed.model_dump(by_alias=True) == {
            "postIds": [],
            "meta": {"socialCount": 0, "semanticCount": 0},
        }
        assert keyword_embeddings.calls == []

    @pytest.mark.asyncio
    async def test_union_should_be_social_first_without_duplicates(
        self, retrieval_service, retrieval_settings, document_store, keyword_embeddings, user_id
    ) -> None:
        # Arrange
        await seed_post(document_store, keyword_embeddings, "post-b", "ion trap research post")
        await seed_post(document_store, keyword_embeddings, "post-c", "ion trap laser post")
        reader = FakePlatformReader(
            profiles={user_id: {"skills": "ion trap"}},
            peer_posts={user_id: ["post-a", "post-b"]},
        )
        service = FeedService(retrieval_service, reader, retrieval_settings)

        # Act
        feed = await service.compose(user_id)

        # Assert
        assert feed.post_ids[:2] == ["post-a", "post-b"]
        assert set(feed.post_ids) == {"post-a", "post-b", "post-c"}
        assert len(feed.post_ids) == len(set(feed.post_ids))
        assert feed.meta.social_count == 2
        assert feed.meta.semantic_count == 2
        assert len(feed.post_ids) < feed.meta.social_count + feed.meta.semantic_count

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "social,semantic",
        [
            ([], []),
            (["a"], []),
            ([], ["x", "y"]),
            (["a", "b"], ["c", "d"]),
            (["a", "b"], ["b", "a"]),
            (["a", "b", "c"], ["c", "e"]),
        ],
    )
    async def test_union_property(self, retrieval_settings, user_id, social, semantic) -> None:
        # Arrange
        retrieval = AsyncMock()
        retrieval.search_links.return_value = semantic
        reader = FakePlatformReader(profiles={user_id: {"skills": "qubits"}}, peer_posts={user_id: social})
        service = FeedService(retrieval, reader, retrieval_settings)

        # Act
        feed = await service.compose(user_id)

        # Assert
        total = feed.meta.social_count + feed.meta.semantic_count
        disjoint = not set(social) & set(semantic)
        assert len(feed.post_ids) <= total
        assert (len(feed.post_ids) == total) == disjoint
        assert len(feed.post_ids) == len(set(feed.post_ids))

    @pytest.mark.asyncio
    async def test_semantic_failure_should_degrade_to_social_only(self, retrieval_settings, user_id) -> None:
        retrieval = AsyncMock()
        retrieval.search_links.side_effect = RetrievalError("embedding failed")
        reader = FakePlatformReader(profiles={user_id: {"skills": "qubits"}}, peer_posts={user_id: ["p1"]})
        service = FeedService(retrieval, reader, retrieval_settings)

        feed = await service.compose(user_id)

        assert feed.post_ids == ["p1"]
        assert feed.meta.semantic_count == 0

    @pytest.mark.asyncio
    async def test_semantic_strategy_should_use_feed_settings(self, retrieval_settings, user_id) -> None:
        retrieval = AsyncMock()
        retrieval.search_links.return_value = []
        reader = FakePlatformReader(profiles={user_id: {"skills": "qubits"}})
        service = FeedService(retrieval, reader, retrieval_settings)

        await service.compose(user_id)

        retrieval.search_links.assert_awaited_once_with(
            "Skills: qubits", EntityType.POST, threshold=0.1, top_k=40
        )

    @pytest.mark.asyncio
    async def test_social_store_failure_should_degrade_to_semantic_only(self, retrieval_settings, user_id) -> None:
        # Arrange
        retrieval = AsyncMock()
        retrieval.search_links.return_value = ["p2"]
        session_factory = MagicMock()
        session_factory.return_value.__aenter__.return_value = AsyncMock()
        session_factory.return_value.__aexit__.return_value = False
        service = FeedService(retrieval, PlatformReader(session_factory), retrieval_settings)
        connection_error = OperationalError("SELECT", {}, Exception("connection refused"))

        # Act
        with patch(
            "q5search.core.platform_reader.connection_crud.get_accepted_peer_ids",
            new_callable=AsyncMock,
            side_effect=connection_error,
        ), patch(
            "q5search.core.platform_reader.profile_crud.get_by_id",
            new_callable=AsyncMock,
            return_value={"skills": "qubits"},
        ):
            feed = await service.compose(user_id)

        # Assert
        assert feed.post_ids == ["p2"]
        assert feed.meta.social_count == 0
        assert feed.meta.semantic_count == 1

    @pytest.mark.asyncio
    async def test_profile_read_failure_should_degrade_to_social_only(self, retrieval_settings, user_id) -> None:
        # Arrange
        retrieval = AsyncMock()
        reader = FakePlatformReader(peer_posts={user_id: ["p1"]})
        reader.get_profile = AsyncMock(side_effect=DocumentStoreError("Failed to read profile", operation="get_profile"))
        service = FeedService(retrieval, reader, retrieval_settings)

        # Act
        feed = await service.compose(user_id)

        # Assert
        assert feed.post_ids == ["p1"]
        assert feed.meta.semantic_count == 0
        retrieval.search_links.assert_not_awaited()
