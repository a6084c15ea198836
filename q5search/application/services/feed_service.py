"""
Personalized feed service.

Combines posts from the user's accepted connections with posts that are
semantically close to the user's profile.

Dependencies: q5search.core
System role: Personalized feed composition
"""

import asyncio
import logging

from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.configs.retrieval import RetrievalSettings
from q5search.core.exceptions import DocumentStoreError, RetrievalError
from q5search.core.profile_text import build_profile_query
from q5search.models.feed import FeedMeta, PersonalizedFeed

logger = logging.getLogger(__name__)


class FeedService:
    """Social-graph and interest-graph feed composer."""

    def __init__(self, retrieval_service, platform_reader, settings: RetrievalSettings) -> None:
        self.retrieval_service = retrieval_service
        self.platform_reader = platform_reader
        self.settings = settings

    async def _social_post_ids(self, user_id: str) -> list[str]:
        try:
            return await self.platform_reader.get_peer_post_ids(user_id, self.settings.feed_social_limit)
        except DocumentStoreError as e:
            logger.error(f"{__name__}:_social_post_ids - Social strategy failed: {e}")
            return []

    async def _semantic_post_ids(self, user_id: str) -> list[str]:
        try:
            profile = await self.platform_reader.get_profile(user_id)
        except DocumentStoreError as e:
            logger.error(f"{__name__}:_semantic_post_ids - Profile read failed: {e}")
            return []
        query = build_profile_query(profile)
        if not query:
            return []
        try:
            return await self.retrieval_service.search_links(
                query,
                EntityType.POST,
                threshold=self.settings.feed_threshold,
                top_k=self.settings.feed_top_k,
            )
        except RetrievalError as e:
            logger.error(f"{__name__}:_semantic_post_ids - Semantic strategy failed: {e}")
            return []

    async def compose(self, user_id: str | None) -> PersonalizedFeed:
        """
        Build the personalized feed for a user.

        Args:
            user_id: Viewer (anonymous viewers get an empty feed)

        Returns:
            PersonalizedFeed: Social post ids first, then semantic ones, without duplicates
            (a strategy whose store or retrieval read fails contributes nothing)
        """
        if not user_id:
            return PersonalizedFeed()

        social, semantic = await asyncio.gather(
            self._social_post_ids(user_id),
            self._semantic_post_ids(user_id),
        )
        post_ids = list(dict.fromkeys([*social, *semantic]))
        logger.info(
            f"{__name__}:compose - user={user_id} social={len(social)} "
            f"semantic={len(semantic)} total={len(post_ids)}"
        )
        return PersonalizedFeed(
            post_ids=post_ids,
            meta=FeedMeta(social_count=len(social), semantic_count=len(semantic)),
        )
